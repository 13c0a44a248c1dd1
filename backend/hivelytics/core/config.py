from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

REPO_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(REPO_ROOT / '.env'), env_file_encoding='utf-8', extra='ignore')

    app_name: str = 'Hivelytics'
    log_level: str = Field(default='INFO', validation_alias='LOG_LEVEL')

    hive_rpc_url: str = Field(default='https://api.hive.blog', validation_alias='HIVE_RPC_URL')
    hafah_base_url: str = Field(default='https://api.hive.blog/hafah-api', validation_alias='HAFAH_BASE_URL')
    hive_user_agent: str = 'hivelytics/0.1'
    hive_timeout_connect: float = 3.0
    hive_timeout_read: float = 20.0

    haf_page_size: int = 100
    haf_vote_max_pages: int = 60
    haf_reward_max_pages: int = 100
    history_days: int = 30
    delegations_limit: int = 50

    frontend_origin: str = 'http://localhost:3000'
    frontend_origins_csv: str = 'http://localhost:3000,http://127.0.0.1:3000'

    @property
    def frontend_origins(self) -> list[str]:
        raw = [s.strip() for s in self.frontend_origins_csv.split(',') if s.strip()]
        if self.frontend_origin and self.frontend_origin not in raw:
            raw.append(self.frontend_origin)
        seen: set[str] = set()
        out: list[str] = []
        for origin in raw:
            if origin in seen:
                continue
            seen.add(origin)
            out.append(origin)
        return out


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
