from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_version: str = "0.1.0"
    expose_version: bool = False
    enable_post: bool = True
    base_uri: str = "/"
    tree_root: str = "./data/tree"
    asset_dir: str = str(_PACKAGE_DIR / "assets")
    asset_cache_max_age: int = 1209600
    xml_namespaces: dict[str, str] = {
        "DAV:": "d",
        "http://sabredav.org/ns": "s",
        "urn:ietf:params:xml:ns:caldav": "cal",
        "urn:ietf:params:xml:ns:carddav": "card",
        "http://calendarserver.org/ns/": "cs",
    }
    host: str = "127.0.0.1"
    port: int = 8080


settings = Settings()
