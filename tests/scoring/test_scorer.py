import pytest
from scoring.scorer import DisclosureScorer, base_score, clamp
from scoring.types import Adjustment, Persona, PersonaScores, RiskAssessment, RiskLevel

HIGH, MEDIUM, LOW = RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW


def assessment(legal=LOW, corporate=LOW, emotional=LOW, reason="test"):
    return RiskAssessment(legal_risk=legal, corporate_risk=corporate, emotional_discomfort=emotional, reason=reason)


class TestBaseScore:
    def test_mapping(self):
        assert base_score(HIGH) == 4
        assert base_score(MEDIUM) == 2
        assert base_score(LOW) == 1

    def test_unrecognized_level_counts_as_one(self):
        assert base_score(None) == 1

    def test_clamp(self):
        assert clamp(-3) == 0
        assert clamp(14) == 10
        assert clamp(6) == 6


class TestDisclosureScorer:
    def setup_method(self):
        self.scorer = DisclosureScorer()

    @pytest.mark.parametrize("levels,expected", [
        ((HIGH, MEDIUM, LOW), (4, 2, 1)),
        ((LOW, HIGH, MEDIUM), (1, 4, 2)),
        ((MEDIUM, LOW, MEDIUM), (2, 1, 2)),
        ((None, None, None), (1, 1, 1)),
    ])
    def test_base_mapping_without_rules(self, levels, expected):
        """No keyword and no high discomfort: scores equal the base mapping."""
        scores = self.scorer.score(assessment(*levels), Adjustment.zero(), "Nice weather today.")
        assert (scores.legal, scores.corporate, scores.emotional) == expected
        assert scores.fired_rules == []

    def test_high_emotional_discomfort_adds_two(self):
        scores = self.scorer.score(assessment(emotional=HIGH), Adjustment.zero(), "Nice weather today.")
        assert scores.emotional == 6
        assert scores.fired_rules == ["high_emotional_discomfort"]

    @pytest.mark.parametrize("legal,corporate,emotional", [
        (HIGH, HIGH, MEDIUM),
        (LOW, LOW, LOW),
        (MEDIUM, HIGH, LOW),
        (None, MEDIUM, None),
    ])
    def test_violent_intent_overwrites_legal_and_emotional(self, legal, corporate, emotional):
        primary = self.scorer.primary_scores(assessment(legal, corporate, emotional), "I will kill you")
        assert primary[Persona.LEGAL] == 9
        assert primary[Persona.EMOTIONAL] == 10
        assert primary[Persona.CORPORATE] == base_score(corporate) + 4

    def test_violent_intent_with_high_discomfort_is_clamped(self):
        scores = self.scorer.score(assessment(emotional=HIGH), Adjustment.zero(), "燃やして放火してやる")
        assert scores.legal == 9
        assert scores.emotional == 10

    def test_death_wish_scenario(self):
        """Death-wish term, all low, zero adjustments."""
        scores = self.scorer.score(assessment(), Adjustment.zero(), "Just go die already")
        assert scores.legal == 5
        assert scores.emotional == 6
        assert scores.corporate == 3
        assert scores.fired_rules == ["death_wish"]

    def test_japanese_death_wish(self):
        scores = self.scorer.score(assessment(), Adjustment.zero(), "お前なんか死ね")
        assert (scores.legal, scores.corporate, scores.emotional) == (5, 3, 6)

    def test_rules_stack_in_order(self):
        # violent (set 9/10, corp +4), then illegality (+3/+3), then insult (emo +3, legal +2)
        text = "That stupid embezzler should be arrested, I'll stab him"
        scores = self.scorer.score(assessment(), Adjustment.zero(), text)
        assert scores.fired_rules == ["violent_intent", "illegality", "personal_insult"]
        assert scores.legal == 10       # 9 + 3 + 2 = 14, clamped
        assert scores.corporate == 8    # 1 + 4 + 3
        assert scores.emotional == 10   # 10 + 3 = 13, clamped

    def test_matching_is_case_insensitive(self):
        scores = self.scorer.score(assessment(), Adjustment.zero(), "This company is ILLEGAL")
        assert scores.fired_rules == ["illegality"]
        assert (scores.legal, scores.corporate) == (4, 4)

    def test_english_terms_respect_word_boundaries(self):
        scores = self.scorer.score(assessment(), Adjustment.zero(), "Great skill and a stable stable")
        assert scores.fired_rules == []

    def test_corporate_misconduct(self):
        scores = self.scorer.score(assessment(), Adjustment.zero(), "あの会社はブラック企業でパワハラ三昧")
        assert (scores.legal, scores.corporate, scores.emotional) == (3, 5, 1)

    def test_adjustments_are_added_before_clamping(self):
        adj = Adjustment(legal_adjust=2, corporate_adjust=-2, emotional_adjust=1)
        scores = self.scorer.score(assessment(HIGH, LOW, MEDIUM), adj, "Nice weather today.")
        assert (scores.legal, scores.corporate, scores.emotional) == (6, 0, 3)

    def test_out_of_range_adjustment_is_only_clamped_downstream(self):
        adj = Adjustment(legal_adjust=25, corporate_adjust=-25, emotional_adjust=0)
        scores = self.scorer.score(assessment(), adj, "Nice weather today.")
        assert scores.legal == 10
        assert scores.corporate == 0

    @pytest.mark.parametrize("text", [
        "", "kill", "死ね バカ 違法 倒産 殺す", "stupid ugly idiot bankrupt harassment illegal",
    ])
    @pytest.mark.parametrize("adjust", [-50, -2, 0, 2, 50])
    def test_scores_always_in_range(self, text, adjust):
        adj = Adjustment(adjust, adjust, adjust)
        for levels in [(HIGH, HIGH, HIGH), (LOW, LOW, LOW), (None, MEDIUM, HIGH)]:
            scores = self.scorer.score(assessment(*levels), adj, text)
            for value in (scores.legal, scores.corporate, scores.emotional):
                assert 0 <= value <= 10

    def test_custom_rule_table(self):
        from scoring.heuristics import build_rules
        rules = build_rules([{'name': 'spoiler', 'patterns': [r'\bspoiler\b'], 'add': {'corporate': 5}}])
        scorer = DisclosureScorer(rules)
        scores = scorer.score(assessment(), Adjustment.zero(), "Spoiler: kill count")
        assert scores.fired_rules == ["spoiler"]
        assert scores == PersonaScores(legal=1, corporate=6, emotional=1)
