from pydantic import AliasChoices, BaseModel, Field


class LoyaltyAccount(BaseModel):
    model_config = {"frozen": True}

    # Some backend versions expose the balance as pointsBalance
    balance: int = Field(ge=0, validation_alias=AliasChoices("balance", "pointsBalance"))
    totalPointsEarned: int | None = None
    totalPointsRedeemed: int | None = None
