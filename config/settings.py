"""
Settings for the Disclosure Check tool.

Environment variables are read once here (after loading .env) and handed
to the rest of the code explicitly. Nothing below config/ reads os.environ.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

load_dotenv(os.path.join(PROJECT_ROOT, '.env'))


def _env(*names: str) -> Optional[str]:
    """Return the first non-empty environment variable among names."""
    for name in names:
        value = (os.environ.get(name) or '').strip()
        if value:
            return value
    return None


@dataclass(frozen=True)
class APIConfig:
    """Provider API keys."""
    google_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    deepseek_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'APIConfig':
        return cls(
            google_api_key=_env('GOOGLE_API_KEY', 'GEMINI_API_KEY'),
            openai_api_key=_env('OPENAI_API_KEY'),
            anthropic_api_key=_env('ANTHROPIC_API_KEY'),
            deepseek_api_key=_env('DEEPSEEK_API_KEY'),
        )


SETTINGS: Dict[str, Any] = {
    'model': _env('DISCLOSURE_MODEL') or 'gemini-2.5-flash-lite',
    'temperature': 0.1,
    'max_output_tokens': 1024,
    'max_text_length': 1000,
    'keyword_rules_path': os.path.join(PROJECT_ROOT, 'config', 'keyword_rules.yml'),
    'app_env': (_env('APP_ENV') or 'production').lower(),
}
