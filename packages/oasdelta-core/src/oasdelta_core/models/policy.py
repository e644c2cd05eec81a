# oasdelta_core/models/policy.py
import os

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from oasdelta_core.models.severity import SEVERITY_RANK, Severity


class DiffPolicy(BaseModel):
    """How a comparison is filtered and when it counts as failed.

    Environment overrides (optional):

        OASDELTA_FAIL_ON = "Breaking" | "Warning" | "Change"
        OASDELTA_IGNORE_RULES = comma separated rule names, appended to ``ignore_rules``
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    fail_on: Severity = Field(
        default="Breaking",
        validation_alias=AliasChoices("fail_on", "fail-on"),
    )
    ignore_rules: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("ignore_rules", "ignore-rules"),
    )
    include_unchanged: bool = Field(
        default=True,
        validation_alias=AliasChoices("include_unchanged", "include-unchanged"),
    )
    compare_routes: bool = Field(
        default=True,
        validation_alias=AliasChoices("compare_routes", "compare-routes"),
    )

    @field_validator("fail_on", mode="before")
    @classmethod
    def _normalize_severity(cls, v):
        # accept "breaking", "WARNING", ...
        if isinstance(v, str):
            return v.strip().capitalize()
        return v

    @field_validator("ignore_rules", mode="before")
    @classmethod
    def _coerce_rule_list(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [r.strip() for r in v.split(",") if r.strip()]
        return v

    def with_env(self) -> "DiffPolicy":
        """Copy of this policy with ``OASDELTA_*`` overrides applied."""
        updates: dict = {}
        fail_on = os.getenv("OASDELTA_FAIL_ON")
        if fail_on is not None:
            level = fail_on.strip().capitalize()
            if level in SEVERITY_RANK:
                updates["fail_on"] = level
        extra = os.getenv("OASDELTA_IGNORE_RULES")
        if extra:
            names = [r.strip() for r in extra.split(",") if r.strip()]
            updates["ignore_rules"] = list(dict.fromkeys([*self.ignore_rules, *names]))
        return self.model_copy(update=updates) if updates else self

    @classmethod
    def from_env(cls) -> "DiffPolicy":
        return cls().with_env()

    def is_ignored(self, rule_name: str) -> bool:
        return rule_name in self.ignore_rules
