import httpx

from provisioner.config import Settings, get_settings


def get_config() -> Settings:
    return get_settings()


def get_api_client() -> httpx.AsyncClient:
    config = get_config()
    return httpx.AsyncClient(base_url=config.api_url, timeout=config.http_timeout)
