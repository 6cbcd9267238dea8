"""Located regions of document text: bracket spans, modifier tokens, selections."""

from pydantic import BaseModel, Field, model_validator


class BracketSpan(BaseModel):
    """A top-level ``[...]`` region of the document.

    Offsets are half-open character positions into the full document text, so
    ``text[start:end]`` is the bracketed source including both brackets and
    ``inner`` is ``text[start + 1:end - 1]``.

    Attributes:
        start: Offset of the opening ``[``
        end: Offset just past the closing ``]``
        inner: Text strictly between the brackets (never empty)
    """

    model_config = {"frozen": True}

    start: int = Field(..., ge=0, description="Offset of the opening bracket")
    end: int = Field(..., gt=0, description="Offset just past the closing bracket")
    inner: str = Field(..., min_length=1, description="Text between the brackets")

    @model_validator(mode="after")
    def offsets_match_inner(self) -> "BracketSpan":
        if self.end - self.start != len(self.inner) + 2:
            raise ValueError("span offsets do not match inner text length")
        return self

    @property
    def raw(self) -> str:
        """The bracketed source text, brackets included."""
        return f"[{self.inner}]"


class ModifierToken(BaseModel):
    """A signed percentage such as ``+10`` or ``-25`` found in plain text."""

    model_config = {"frozen": True}

    start: int = Field(..., ge=0)
    literal: str = Field(..., pattern=r"^[+-][0-9]+$", description="Token text, sign included")

    @property
    def end(self) -> int:
        return self.start + len(self.literal)

    @property
    def value(self) -> int:
        """Signed percentage."""
        return int(self.literal)

    @property
    def fraction(self) -> float:
        # float() has no digit limit and saturates to +-inf
        return float(self.literal) / 100

    @property
    def is_positive(self) -> bool:
        # styling follows the written sign, so "-0" still reads as negative
        return self.literal.startswith("+")


class Selection(BaseModel):
    """The host's current cursor/selection range.

    A collapsed selection (a caret) has ``from_ == to``. The field is exposed as
    ``from`` when dumping or validating by alias.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    from_: int = Field(0, ge=0, alias="from")
    to: int = Field(0, ge=0)

    @model_validator(mode="after")
    def ordered(self) -> "Selection":
        if self.from_ > self.to:
            raise ValueError("selection 'from' must be <= 'to'")
        return self

    @classmethod
    def caret(cls, offset: int) -> "Selection":
        return cls(from_=offset, to=offset)

    @property
    def is_collapsed(self) -> bool:
        return self.from_ == self.to

    def within(self, span: BracketSpan) -> bool:
        """True when the whole selection lies inside the span, bracket edges included."""
        return self.from_ >= span.start and self.to <= span.end
