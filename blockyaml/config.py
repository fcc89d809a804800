"""Parser limits, overridable from the environment."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParserConfig(BaseSettings):
    """Resource limits for one top-level parse.

    ``BLOCKYAML_MAX_DEPTH`` and ``BLOCKYAML_STEP_LIMIT`` (or an ``.env``
    file) override the defaults.
    """

    model_config = SettingsConfigDict(env_prefix="BLOCKYAML_", env_file=".env", frozen=True, extra="ignore")

    # Deepest chain of nested blocks (the document itself is 0), and of
    # flow collections within one value. Capped to stay within the
    # interpreter's recursion limit.
    max_depth: int = Field(default=64, gt=0, le=128)
    # Characters the line classifier may examine for a single line.
    step_limit: int = Field(default=1_000_000, gt=0)
