"""Base model for GitHub API records."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable API record.

    GitHub adds response fields over time; fields not declared on a model are
    dropped on validation rather than rejected.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
