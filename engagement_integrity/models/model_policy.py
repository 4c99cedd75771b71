"""Configuration models for the decision policy."""

import os

from pydantic import BaseModel, Field, model_validator

from engagement_integrity.consts import DEFAULT_FUSION_WEIGHTS, FUSION_WEIGHT_ENV_VARS


class FusionWeights(BaseModel):
    """Configurable evaluator weights for the trust score.

    All weights must sum to 1.0. Spam is a risk signal and is inverted
    before it is combined.
    """

    relevance: float = Field(default=DEFAULT_FUSION_WEIGHTS["relevance"], ge=0.0, le=1.0)
    spam: float = Field(default=DEFAULT_FUSION_WEIGHTS["spam"], ge=0.0, le=1.0)
    consistency: float = Field(default=DEFAULT_FUSION_WEIGHTS["consistency"], ge=0.0, le=1.0)
    quality: float = Field(default=DEFAULT_FUSION_WEIGHTS["quality"], ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "FusionWeights":
        """Validate that weights sum to 1.0."""
        total = self.relevance + self.spam + self.consistency + self.quality
        if abs(total - 1.0) > 0.001:
            msg = f"Weights must sum to 1.0, got {total}"
            raise ValueError(msg)
        return self

    @classmethod
    def from_env(cls, **overrides: float) -> "FusionWeights":
        """Build weights with resolution order: explicit param > env var > default.

        Raises:
            ValueError: If an environment value is not a number or the
                resulting weights are invalid
        """
        values: dict[str, float] = {}
        for name, env_var in FUSION_WEIGHT_ENV_VARS.items():
            if name in overrides:
                values[name] = overrides[name]
                continue

            raw = os.getenv(env_var, "").strip()
            if not raw:
                continue
            try:
                values[name] = float(raw)
            except ValueError:
                msg = f"{env_var} must be a number, got {raw!r}"
                raise ValueError(msg) from None

        return cls(**values)
