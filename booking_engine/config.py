from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    hotel_api_base_url: str = "http://localhost:8080/api"
    hotel_api_token: str = ""
    hotel_api_user_id: str | None = None
    request_timeout: float = 30.0
    points_unit_value: Decimal = Field(default=Decimal("0.01"), gt=0)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, lt=1)
    points_per_currency_unit: int = Field(default=1, ge=0)
    log_level: str = "INFO"
