from __future__ import annotations

from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CATEGORIES_", env_file=".env", extra="ignore"
    )

    database_url: str | None = None

    # Categories that receive the transactions of a permanently deleted category
    fallback_expense_category_id: str | None = None
    fallback_income_category_id: str | None = None

    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True, slots=True)
class CategoryServiceConfig:
    fallback_expense_category_id: str
    fallback_income_category_id: str


def get_category_config() -> CategoryServiceConfig:
    if not settings.fallback_expense_category_id or not settings.fallback_income_category_id:
        raise RuntimeError(
            "CATEGORIES_FALLBACK_EXPENSE_CATEGORY_ID and "
            "CATEGORIES_FALLBACK_INCOME_CATEGORY_ID must be set."
        )
    return CategoryServiceConfig(
        fallback_expense_category_id=settings.fallback_expense_category_id,
        fallback_income_category_id=settings.fallback_income_category_id,
    )


settings = Settings()
