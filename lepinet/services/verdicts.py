"""
Expert verdict resolution.

An expert picks exactly one verdict for an AI prediction. The verdict decides
what gets written to the review row:

    AGREE          -> AI's name, agreed, confidence as chosen
    CORRECT        -> catalog species chosen by the expert, confidence as chosen
    UNSURE         -> AI's name (if any), always 'uncertain'
    NOT_BUTTERFLY  -> the NOT_A_BUTTERFLY sentinel, always 'certain'
"""
import enum
from dataclasses import dataclass
from typing import Optional

from lepinet.core.exceptions import InvalidArgumentException
from lepinet.models import ConfidenceLevel, NOT_A_BUTTERFLY


class Verdict(str, enum.Enum):
    AGREE = "AGREE"
    CORRECT = "CORRECT"
    UNSURE = "UNSURE"
    NOT_BUTTERFLY = "NOT_BUTTERFLY"


@dataclass(frozen=True)
class ResolvedVerdict:
    agreed_with_ai: bool
    identified_species_name: Optional[str]
    confidence_level: ConfidenceLevel


def can_submit(verdict: Verdict, corrected_species_name: Optional[str]) -> bool:
    """A correction is only submittable once a species has been chosen."""
    if verdict == Verdict.CORRECT:
        return bool(corrected_species_name and corrected_species_name.strip())
    return True


def resolve_verdict(
    verdict: Verdict,
    predicted_species_name: Optional[str],
    corrected_species_name: Optional[str] = None,
    confidence: ConfidenceLevel = ConfidenceLevel.CERTAIN,
) -> ResolvedVerdict:
    """
    Turn a verdict into the values stored on the review.

    Raises:
        InvalidArgumentException: CORRECT without a chosen species
    """
    verdict = Verdict(verdict)
    confidence = ConfidenceLevel(confidence)

    if verdict == Verdict.AGREE:
        return ResolvedVerdict(
            agreed_with_ai=True,
            identified_species_name=predicted_species_name,
            confidence_level=confidence,
        )

    if verdict == Verdict.CORRECT:
        if not can_submit(verdict, corrected_species_name):
            raise InvalidArgumentException(
                "A species must be selected to correct the AI prediction",
                details={"verdict": verdict.value, "field": "speciesId"},
            )
        return ResolvedVerdict(
            agreed_with_ai=False,
            identified_species_name=corrected_species_name.strip(),
            confidence_level=confidence,
        )

    if verdict == Verdict.UNSURE:
        return ResolvedVerdict(
            agreed_with_ai=False,
            identified_species_name=predicted_species_name,
            confidence_level=ConfidenceLevel.UNCERTAIN,
        )

    # NOT_BUTTERFLY
    return ResolvedVerdict(
        agreed_with_ai=False,
        identified_species_name=NOT_A_BUTTERFLY,
        confidence_level=ConfidenceLevel.CERTAIN,
    )
