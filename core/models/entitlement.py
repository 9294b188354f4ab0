# =============================================================================
# core/models/entitlement.py - Entitlement Check Result
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

from .plan import ResourceKind, TierInfo


class EntitlementResult(BaseModel):
    """
    Whether a user may create one more resource of a kind.

    Computed per request and never stored.

    - limit is None when the tier is unlimited; current_count is then 0
      because no count query was issued.
    - fail_open is True when an infrastructure error was swallowed and the
      result is the permissive default rather than a real check.
    """

    model_config = ConfigDict(frozen=True)

    resource: ResourceKind
    can_create: bool
    limit: int | None = Field(default=None, description="Cap for the resource, None if unlimited")
    current_count: int = Field(default=0, ge=0)
    tier: str | None = None
    fail_open: bool = False

    @property
    def is_unlimited(self) -> bool:
        return self.limit is None and not self.fail_open

    @classmethod
    def unlimited(cls, resource: ResourceKind, tier: TierInfo) -> "EntitlementResult":
        return cls(resource=resource, can_create=True, tier=tier.name)

    @classmethod
    def permissive_default(cls, resource: ResourceKind) -> "EntitlementResult":
        """The result returned when the check itself failed."""
        return cls(resource=resource, can_create=True, fail_open=True)


class EntitlementSummary(BaseModel):
    """
    Response of GET /subscriptions/me/limits.

    tier and pricing_model are None when the subscription couldn't be read.
    """
    tier: str | None = None
    pricing_model: str | None = None
    products: EntitlementResult
    portfolios: EntitlementResult
