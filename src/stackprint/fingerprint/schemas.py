"""Pydantic models for fingerprint output."""

from pydantic import BaseModel, ConfigDict


class FingerprintComponents(BaseModel):
    """The four independently computed component hashes."""

    model_config = ConfigDict(frozen=True)

    vcs_head: str | None = None
    structure: str = ""
    dependencies: str = ""
    configs: str = ""


class FingerprintResult(BaseModel):
    """Combined fingerprint of a project tree.

    ``hash`` is empty and ``valid`` is False when the fingerprint could
    not be computed; ``invalid_reason`` then says why.
    """

    model_config = ConfigDict(frozen=True)

    hash: str
    components: FingerprintComponents
    timestamp_ms: int
    valid: bool
    invalid_reason: str | None = None
