"""Registry configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegistryOptions(BaseModel):
    """Naming conventions applied when keys are not given explicitly.

    Args:
        default_primary_key: Primary-key attribute for models that do not name one.
        default_foreign_key_suffix: Suffix appended to a model name to build a
            conventional foreign-key column (``Customer`` -> ``CustomerCode``).
    """

    model_config = ConfigDict(frozen=True)

    default_primary_key: str = Field(default="code", min_length=1)
    default_foreign_key_suffix: str = Field(default="Code", min_length=1)

    def foreign_key_for(self, model_name: str) -> str:
        """Conventional foreign-key column pointing at ``model_name``."""
        return f"{model_name}{self.default_foreign_key_suffix}"
