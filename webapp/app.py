"""
Disclosure Check Web Application
A single-page interface for checking a post for disclosure request risk
"""
from __future__ import annotations

import sys
import os

# Ensure project root is on PYTHONPATH
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import streamlit as st

from config.settings import SETTINGS
from core.request_handler import build_pipeline, handle_disclosure_request
from scoring.contract import MAX_TEXT_LENGTH
from utils.score_formatter import get_collective_status

# Configure logging for the webapp
import logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)

PERSONA_CARDS = [
    ('legal', '⚖️ Internet-savvy lawyer'),
    ('corporate', '🏢 Listed-company legal department'),
    ('emotional', '💄 Sharp-tongued commentator'),
]

COLLECTIVE_COLORS = {
    'collective-decided': '#D9534F',
    'collective-split': '#F0AD4E',
    'collective-declined': '#5CB85C',
}


# Page configuration
st.set_page_config(
    page_title="Disclosure Check",
    page_icon="⚖️",
    layout="centered",
)

# Custom CSS for better styling
st.markdown("""
<style>
    .main-header {
        font-size: 2.4rem;
        font-weight: bold;
        margin-bottom: 0.5rem;
    }
    .collective {
        font-size: 1.6rem;
        font-weight: bold;
        padding: 1rem;
        border-radius: 0.5rem;
        color: white;
        text-align: center;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_pipeline():
    return build_pipeline(model=SETTINGS['model'])


def show_result(payload: dict):
    color = COLLECTIVE_COLORS.get(payload['collective_class'], '#666')
    st.markdown(
        f'<div class="collective" style="background:{color}">{payload["collective"]}</div>',
        unsafe_allow_html=True,
    )
    st.caption(get_collective_status(payload['collective_class']))

    for key, title in PERSONA_CARDS:
        with st.container(border=True):
            st.markdown(f"**{title}**")
            st.write(payload[key])

    st.info(f"AI analysis: {payload['ai_reason']}")


def main():
    st.markdown('<div class="main-header">⚖️ Disclosure Check</div>', unsafe_allow_html=True)
    st.caption("Three personas judge whether a post could lead to a disclosure request.")

    text = st.text_area("Post text", height=180, max_chars=MAX_TEXT_LENGTH)

    if st.button("Run check", type="primary", width='stretch'):
        with st.spinner("Consulting the panel..."):
            status, payload = handle_disclosure_request('POST', {'tweetText': text}, pipeline=get_pipeline())
        st.session_state['last_result'] = (status, payload)

    last = st.session_state.get('last_result')
    if last:
        status, payload = last
        if status == 200:
            show_result(payload)
        else:
            st.error(f"❌ {payload.get('error') or payload.get('message')}")


if __name__ == '__main__':
    main()
