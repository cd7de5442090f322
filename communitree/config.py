import os
from dataclasses import dataclass

@dataclass(frozen=True)
class Settings:
    data_path: str = "communitree_state.json"
    # Empty means no remote API; services must then be injected
    api_base_url: str = ""
    api_token: str = ""
    log_level: str = "INFO"

def load_settings() -> Settings:
    return Settings(
        data_path=os.getenv("COMMUNITREE_DATA_PATH", "").strip() or Settings.data_path,
        api_base_url=os.getenv("COMMUNITREE_API_URL", "").strip(),
        api_token=os.getenv("COMMUNITREE_API_TOKEN", "").strip(),
        log_level=os.getenv("COMMUNITREE_LOG_LEVEL", "").strip().upper() or Settings.log_level,
    )
