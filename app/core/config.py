from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

	APP_NAME: str = Field(default="Kate's Cuts API")
	DEBUG: bool = Field(default=False)
	API_PREFIX: str = Field(default="/api")
	LOG_LEVEL: str = Field(default="INFO")

	# Database
	DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./katescuts.db")

	# Auth / JWT
	JWT_SECRET: str = Field(default="dev-change-me")
	JWT_ALGORITHM: str = Field(default="HS256")
	ACCESS_TOKEN_EXPIRES_MINUTES: int = Field(default=60 * 24)

	# Bootstrap super admin (scripts/seed_data.py)
	SUPER_ADMIN_USERNAME: str = Field(default="")
	SUPER_ADMIN_PASSWORD: str = Field(default="")

	# What the limit gate does when the plan or usage lookup fails
	LIMIT_LOOKUP_ERROR_POLICY: Literal["allow", "deny"] = Field(default="allow")

	# Azure Monitor / Application Insights
	AZURE_MONITOR_CONN_STR: str = Field(default="")
	ENABLE_APP_INSIGHTS: bool = Field(default=True)
	SAMPLING_RATIO: float = Field(default=1.0)


settings = Settings()
