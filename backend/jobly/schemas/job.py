from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value a SQLite INTEGER column can bind.
SQL_INT_MAX = 2**63 - 1

# Equity is stored as REAL; 15 significant digits survive the round trip.
EQUITY_DIGITS = 15


class JobCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str = Field(min_length=1)
    salary: int | None = Field(None, ge=0, le=SQL_INT_MAX)
    equity: Decimal | None = Field(
        None, ge=0, le=1, max_digits=EQUITY_DIGITS
    )
    company_handle: str = Field(alias="companyHandle", min_length=1, max_length=25)


class JobUpdate(BaseModel):
    """Fields a job may change after creation. The company never changes."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1)
    salary: int | None = Field(None, ge=0, le=SQL_INT_MAX)
    equity: Decimal | None = Field(
        None, ge=0, le=1, max_digits=EQUITY_DIGITS
    )

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("title cannot be null")
        return value


class JobFilter(BaseModel):
    title: str | None = None
    min_salary: int | None = Field(None, ge=0, le=SQL_INT_MAX)
    max_salary: int | None = Field(None, ge=0, le=SQL_INT_MAX)
    has_equity: bool | None = None


class JobResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    salary: int | None
    equity: Decimal | None
    company_handle: str = Field(alias="companyHandle")


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: list[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: int
