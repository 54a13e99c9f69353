from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class WindowRules(BaseModel):
    allowed_days: list[int] = Field(default_factory=lambda: [7, 14, 30, 60, 90])
    default_days: int = 30

    @field_validator("allowed_days")
    @classmethod
    def positive_days(cls, v: list[int]) -> list[int]:
        if not v or any(d <= 0 for d in v):
            raise ValueError("allowed_days must be a non-empty list of positive integers")
        return v

    @model_validator(mode="after")
    def default_is_allowed(self) -> "WindowRules":
        if self.default_days not in self.allowed_days:
            raise ValueError(f"default_days {self.default_days} not in allowed_days")
        return self

class DeviceRules(BaseModel):
    mobile_max_width: int = Field(default=768, gt=0)

class RankingRules(BaseModel):
    top_countries: int = Field(default=10, gt=0)
    top_pages: int = Field(default=10, gt=0)
    top_blog_posts: int = Field(default=5, gt=0)

class ActivityRules(BaseModel):
    window_days: int = Field(default=30, gt=0)

class GeoRules(BaseModel):
    merge_precision: int = Field(default=2, ge=0)

class DisplayRules(BaseModel):
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

class AnalyticsRules(BaseModel):
    windows: WindowRules = Field(default_factory=WindowRules)
    devices: DeviceRules = Field(default_factory=DeviceRules)
    rankings: RankingRules = Field(default_factory=RankingRules)
    activity: ActivityRules = Field(default_factory=ActivityRules)
    geo: GeoRules = Field(default_factory=GeoRules)
    display: DisplayRules = Field(default_factory=DisplayRules)

class Rules(BaseModel):
    project: ProjectRules
    analytics: AnalyticsRules = Field(default_factory=AnalyticsRules)
