"""
Keyword Heuristics
Rule table that nudges persona scores based on what the post literally says.
Rules are data: they load from config/keyword_rules.yml and fall back to
the built-in table below when that file is missing or unreadable.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern

import yaml

from scoring.types import Persona, RiskAssessment, RiskLevel

logger = logging.getLogger(__name__)

# Built-in rule table, same content as config/keyword_rules.yml
DEFAULT_RULES: List[Dict[str, Any]] = [
    {
        'name': 'violent_intent',
        'patterns': ['殺す', '刺す', 'めった刺し', '放火',
                     r'\bkill(?:s|ed|ing)?\b', r'\bstab(?:s|bed|bing)?\b',
                     r'\barson\b', r'\bset fire to\b'],
        'set': {'legal': 9, 'emotional': 10},
        'add': {'corporate': 4},
    },
    {
        'name': 'death_wish',
        'patterns': ['死ね', '生きる価値', '犯罪者',
                     r'\bgo die\b', r'\bdrop dead\b', r"\bdon'?t deserve to live\b",
                     r'\bcriminals?\b'],
        'add': {'legal': 4, 'emotional': 5, 'corporate': 2},
    },
    {
        'name': 'illegality',
        'patterns': ['違法', '逮捕', '前科', '横領',
                     r'\billegal(?:ly)?\b', r'\barrest(?:s|ed)?\b',
                     r'\bembezzl\w*', r'\bcriminal record\b'],
        'add': {'legal': 3, 'corporate': 3},
    },
    {
        'name': 'personal_insult',
        'patterns': ['バカ', 'アホ', '無能', 'キモい', '頭が悪い', 'ブス', 'デブ', 'ハゲ', '醜い', 'チビ',
                     r'\bstupid\b', r'\bidiots?\b', r'\bmorons?\b',
                     r'\bincompetent\b', r'\bugly\b'],
        'add': {'emotional': 3, 'legal': 2},
    },
    {
        'name': 'corporate_misconduct',
        'patterns': ['倒産', 'ブラック企業', '隠蔽', 'パワハラ', 'セクハラ',
                     r'\bbankrupt\w*', r'\bharassment\b', r'\bcover-?up\b', r'\bsweatshop\b'],
        'add': {'corporate': 4, 'legal': 2},
    },
    {
        'name': 'high_emotional_discomfort',
        'when_risk': {'emotional_discomfort': 'high'},
        'add': {'emotional': 2},
    },
]

_RISK_FIELDS = ('legal_risk', 'corporate_risk', 'emotional_discomfort')


@dataclass
class KeywordRule:
    """One row of the heuristic table"""
    name: str
    pattern: Optional[Pattern] = None
    when_risk: Dict[str, RiskLevel] = field(default_factory=dict)
    assign: Dict[Persona, int] = field(default_factory=dict)   # overwrite
    add: Dict[Persona, int] = field(default_factory=dict)      # additive

    def matches(self, text: str, assessment: RiskAssessment) -> bool:
        if self.pattern is not None and not self.pattern.search(text):
            return False
        for risk_field, level in self.when_risk.items():
            if getattr(assessment, risk_field) is not level:
                return False
        return self.pattern is not None or bool(self.when_risk)

    def apply(self, scores: Dict[Persona, int]) -> None:
        """Mutate scores in place: assignments first, then additions."""
        for persona, value in self.assign.items():
            scores[persona] = value
        for persona, delta in self.add.items():
            scores[persona] += delta

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'KeywordRule':
        name = raw.get('name')
        if not name:
            raise ValueError("Keyword rule is missing a name")

        patterns = raw.get('patterns') or []
        pattern = re.compile('|'.join(f'(?:{p})' for p in patterns), re.IGNORECASE) if patterns else None

        when_risk = {}
        for risk_field, level in (raw.get('when_risk') or {}).items():
            if risk_field not in _RISK_FIELDS:
                raise ValueError(f"Rule '{name}': unknown risk field '{risk_field}'")
            parsed = RiskLevel.parse(level)
            if parsed is None:
                raise ValueError(f"Rule '{name}': unknown risk level '{level}'")
            when_risk[risk_field] = parsed

        if pattern is None and not when_risk:
            raise ValueError(f"Rule '{name}' needs patterns or when_risk")

        return cls(
            name=name,
            pattern=pattern,
            when_risk=when_risk,
            assign={Persona(k): int(v) for k, v in (raw.get('set') or {}).items()},
            add={Persona(k): int(v) for k, v in (raw.get('add') or {}).items()},
        )


def build_rules(raw_rules: List[Dict[str, Any]]) -> List[KeywordRule]:
    return [KeywordRule.from_dict(r) for r in raw_rules]


def load_keyword_rules(path: Optional[str] = None) -> List[KeywordRule]:
    """
    Load the rule table from YAML.

    Args:
        path: YAML file with a top-level 'rules' list. None means built-in rules.

    Returns:
        Ordered list of KeywordRule
    """
    if path is None:
        return build_rules(DEFAULT_RULES)
    try:
        if os.path.exists(path):
            with open(path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f) or {}
            rules = build_rules(config.get('rules', []))
            logger.debug(f"Loaded {len(rules)} keyword rules from {path}")
            return rules
        logger.warning(f"Keyword rules not found at {path}, using defaults")
    except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError, re.error) as e:
        logger.warning(f"Error loading keyword rules from {path}: {e}, using defaults")
    return build_rules(DEFAULT_RULES)
