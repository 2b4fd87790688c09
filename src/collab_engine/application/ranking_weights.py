"""Loading and strict validation for ranking weights files.

Example ``weights.json``::

    {
      "schema_version": 1,
      "tag_overlap": 50,
      "follower_tier": 20,
      "recent_activity": 20,
      "reliability": 10
    }
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..config_file import format_validation_error
from ..domain.ranking_weights import MATCH_SCORE_SCALE, RankingWeights
from ..exceptions import RankingWeightsFileNotFoundError, RankingWeightsValidationError
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


class _RankingWeightsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    schema_version: int
    tag_overlap: int
    follower_tier: int
    recent_activity: int
    reliability: int

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @field_validator("tag_overlap", "follower_tier", "recent_activity", "reliability")
    @classmethod
    def _validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_total(self) -> _RankingWeightsModel:
        total = self.tag_overlap + self.follower_tier + self.recent_activity + self.reliability
        if total != MATCH_SCORE_SCALE:
            raise ValueError(f"weights must sum to {MATCH_SCORE_SCALE} (got {total})")
        return self


def load_ranking_weights(*, path: Path, fs: FileSystem) -> RankingWeights:
    """Load and validate ranking weights from JSON."""
    if not fs.exists(path):
        raise RankingWeightsFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _RankingWeightsModel.model_validate_json(payload)
    except ValidationError as exc:
        raise RankingWeightsValidationError(str(path), format_validation_error(exc)) from exc

    return RankingWeights(
        tag_overlap=model.tag_overlap,
        follower_tier=model.follower_tier,
        recent_activity=model.recent_activity,
        reliability=model.reliability,
    )
