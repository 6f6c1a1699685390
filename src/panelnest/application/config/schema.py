"""Pydantic models for nesting job configuration files.

A job file lists the panels to cut, the stock sheets on hand and the
cutting parameters. Stock may be omitted when the sheet size search is
enabled, in which case the searched size is used instead.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

# Supported schema versions for job files
# Version 1.0: Initial schema with panels, sheets and sheet search
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class PanelConfig(BaseModel):
    """Configuration for one class of identical panels.

    Attributes:
        width: Panel width.
        height: Panel height.
        quantity: Number of identical panels.
        mark: Label printed on the cut panel.
        finish: Optional finish tag.
        part_no: Optional part number.
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0, description="Panel width")
    height: float = Field(..., gt=0, description="Panel height")
    quantity: int = Field(default=1, ge=1, description="Number of panels")
    mark: str = Field(default="", description="Panel mark")
    finish: str | None = Field(default=None, description="Finish tag")
    part_no: str | None = Field(default=None, description="Part number")


class SheetConfig(BaseModel):
    """Configuration for one class of stock sheets.

    Attributes:
        id: Sheet class identity. Defaults to the 1-based list position.
        width: Sheet width.
        height: Sheet height.
        quantity: Sheets on hand.
    """

    model_config = ConfigDict(extra="forbid")

    id: int | None = Field(default=None, ge=1, description="Sheet class id")
    width: float = Field(..., gt=0, description="Sheet width")
    height: float = Field(..., gt=0, description="Sheet height")
    quantity: int = Field(default=1, ge=0, description="Sheets available")


class SheetSearchConfig(BaseModel):
    """Configuration for the stock size search."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=False, description="Search for the sheet size")
    min_width: float = Field(default=48.0, gt=0)
    max_width: float = Field(default=96.0, gt=0)
    min_height: float = Field(default=48.0, gt=0)
    max_height: float = Field(default=96.0, gt=0)
    step_size: float = Field(default=12.0, gt=0, description="Grid increment")
    candidate_quantity: int = Field(
        default=1000,
        ge=1,
        description="Stock quantity assumed for each candidate size",
    )

    @model_validator(mode="after")
    def validate_ranges(self) -> "SheetSearchConfig":
        """Ensure each range minimum does not exceed its maximum."""
        if self.min_width > self.max_width:
            raise ValueError(
                f"min_width ({self.min_width}) cannot exceed max_width ({self.max_width})"
            )
        if self.min_height > self.max_height:
            raise ValueError(
                f"min_height ({self.min_height}) cannot exceed max_height ({self.max_height})"
            )
        return self


class NestingConfiguration(BaseModel):
    """Root model for a nesting job file.

    Example:
        >>> config = NestingConfiguration(
        ...     schema_version="1.0",
        ...     panels=[PanelConfig(width=24, height=36, quantity=2)],
        ...     sheets=[SheetConfig(width=96, height=130)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    panels: list[PanelConfig] = Field(..., min_length=1)
    sheets: list[SheetConfig] = Field(default_factory=list)
    blade_width: float = Field(
        default=0.25,
        ge=0,
        le=1.0,
        description="Saw blade kerf",
    )
    allow_rotation: bool = Field(default=True, description="Allow 90 degree rotation")
    sheet_search: SheetSearchConfig = Field(default_factory=SheetSearchConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept known versions and newer minor versions of a known major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("sheets")
    @classmethod
    def validate_unique_sheet_ids(cls, v: list[SheetConfig]) -> list[SheetConfig]:
        """Reject repeated sheet ids, counting positional defaults."""
        ids = [
            sheet.id if sheet.id is not None else index
            for index, sheet in enumerate(v, start=1)
        ]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate sheet ids: {duplicates}")
        return v

    @model_validator(mode="after")
    def validate_stock_available(self) -> "NestingConfiguration":
        """Require stock unless the sheet size is being searched for."""
        if not self.sheets and not self.sheet_search.enabled:
            raise ValueError(
                "At least one sheet is required unless sheet_search is enabled"
            )
        return self
