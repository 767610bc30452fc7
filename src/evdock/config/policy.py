"""Scheduling policy — peak window, criticality and cancellation fees."""

from pydantic import BaseModel, Field, model_validator


class PeakPolicy(BaseModel):
    """Peak-hour window and the rule that exempts critical requests from deferral."""

    peak_start: float = Field(default=12.0, ge=0, lt=24.0, description="Start of peak window (hour, inclusive)")
    peak_end: float = Field(default=18.0, gt=0, le=24.0, description="End of peak window (hour, exclusive)")
    critical_soc_pct: float = Field(
        default=20.0, ge=0, le=100.0,
        description="Vehicles below this state of charge are critical and never deferred",
    )

    @model_validator(mode="after")
    def _check_window(self) -> "PeakPolicy":
        if self.peak_start >= self.peak_end:
            raise ValueError(
                f"peak_start ({self.peak_start}) must be before peak_end ({self.peak_end})"
            )
        return self


class CancellationPolicy(BaseModel):
    """Flat cancellation fees keyed on hours between the anchor and booking start.

    ``time_to_start < short_notice_hours``  → ``short_notice_fee``
    ``time_to_start < medium_notice_hours`` → ``medium_notice_fee``
    otherwise free.
    """

    short_notice_hours: float = Field(default=1.0, ge=0, description="Upper bound of the short-notice band (h)")
    short_notice_fee: float = Field(default=5.0, ge=0, description="Fee inside the short-notice band ($)")
    medium_notice_hours: float = Field(default=4.0, ge=0, description="Upper bound of the medium-notice band (h)")
    medium_notice_fee: float = Field(default=2.0, ge=0, description="Fee inside the medium-notice band ($)")

    @model_validator(mode="after")
    def _check_bands(self) -> "CancellationPolicy":
        if self.short_notice_hours > self.medium_notice_hours:
            raise ValueError("short_notice_hours must not exceed medium_notice_hours")
        return self
