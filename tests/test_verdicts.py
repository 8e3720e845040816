"""
Verdict resolution tests.
"""
import pytest

from lepinet.core.exceptions import InvalidArgumentException
from lepinet.models import ConfidenceLevel, NOT_A_BUTTERFLY
from lepinet.services.verdicts import Verdict, can_submit, resolve_verdict


class TestResolveVerdict:
    """Each verdict writes the documented review values."""

    def test_agree_keeps_prediction_and_chosen_confidence(self):
        resolved = resolve_verdict(Verdict.AGREE, "Common Mormon", confidence=ConfidenceLevel.UNCERTAIN)
        assert resolved.agreed_with_ai is True
        assert resolved.identified_species_name == "Common Mormon"
        assert resolved.confidence_level == ConfidenceLevel.UNCERTAIN

    def test_correct_uses_chosen_species(self):
        resolved = resolve_verdict(Verdict.CORRECT, "Common Mormon", "Blue Mormon")
        assert resolved.agreed_with_ai is False
        assert resolved.identified_species_name == "Blue Mormon"
        assert resolved.confidence_level == ConfidenceLevel.CERTAIN

    @pytest.mark.parametrize("corrected", [None, "", "   "])
    def test_correct_without_species_is_refused(self, corrected):
        with pytest.raises(InvalidArgumentException) as exc_info:
            resolve_verdict(Verdict.CORRECT, "Common Mormon", corrected)
        assert exc_info.value.details["field"] == "speciesId"

    def test_unsure_forces_uncertain(self):
        resolved = resolve_verdict(Verdict.UNSURE, "Common Mormon", confidence=ConfidenceLevel.CERTAIN)
        assert resolved.agreed_with_ai is False
        assert resolved.identified_species_name == "Common Mormon"
        assert resolved.confidence_level == ConfidenceLevel.UNCERTAIN

    def test_not_butterfly_forces_sentinel_and_certain(self):
        resolved = resolve_verdict(
            Verdict.NOT_BUTTERFLY, "Common Mormon", confidence=ConfidenceLevel.UNCERTAIN
        )
        assert resolved.agreed_with_ai is False
        assert resolved.identified_species_name == NOT_A_BUTTERFLY
        assert resolved.confidence_level == ConfidenceLevel.CERTAIN

    def test_accepts_raw_strings(self):
        resolved = resolve_verdict("AGREE", "Lemon Pansy", confidence="uncertain")
        assert resolved.confidence_level == ConfidenceLevel.UNCERTAIN


class TestCanSubmit:
    """Only a correction needs a chosen species."""

    def test_correction_needs_species(self):
        assert can_submit(Verdict.CORRECT, None) is False
        assert can_submit(Verdict.CORRECT, "Blue Mormon") is True

    @pytest.mark.parametrize("verdict", [Verdict.AGREE, Verdict.UNSURE, Verdict.NOT_BUTTERFLY])
    def test_other_verdicts_always_submittable(self, verdict):
        assert can_submit(verdict, None) is True
