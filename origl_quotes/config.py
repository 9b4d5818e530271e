"""Configuration management for the quote resolution pipeline."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .books import get_book

DEFAULT_DCS_URL = "https://git.door43.org"


class CorpusConfig(BaseModel):
    """One corpus repository, e.g. unfoldingWord/en/ult."""

    org: str = "unfoldingWord"
    lang: str
    abbr: str

    @property
    def repo(self) -> str:
        """Repository name on the content service, e.g. 'en_ult'."""
        return f"{self.lang}_{self.abbr}"


class SourceConfig(BaseModel):
    """Where USFM documents come from."""

    kind: Literal["dcs", "local"] = "dcs"
    dcs_url: str = DEFAULT_DCS_URL
    local_dir: Optional[Path] = None
    timeout: float = Field(default=30.0, gt=0)

    gloss: CorpusConfig = Field(default_factory=lambda: CorpusConfig(lang="en", abbr="ult"))
    hebrew: CorpusConfig = Field(default_factory=lambda: CorpusConfig(lang="hbo", abbr="uhb"))
    greek: CorpusConfig = Field(default_factory=lambda: CorpusConfig(lang="el-x-koine", abbr="ugnt"))

    @field_validator("local_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v

    @field_validator("dcs_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class Config(BaseModel):
    """Main configuration for resolving the quotes of one book."""

    book: str
    input_path: Path
    output_path: Path
    errors_path: Optional[Path] = None
    show_progress: bool = True
    source: SourceConfig = Field(default_factory=SourceConfig)

    @field_validator("book")
    @classmethod
    def validate_book(cls, v: str) -> str:
        """Normalize the book code; unknown books are rejected."""
        return get_book(v).code

    @field_validator("input_path", "output_path", "errors_path", mode="before")
    @classmethod
    def convert_paths(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = self.model_dump(mode="json")
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
