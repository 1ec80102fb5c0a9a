"""Configuration for the Selenium driver."""

from pydantic import BaseModel, Field

REMOTE_URL_ENV = "REMOTE_SELENIUM_URL"


class SeleniumConfig(BaseModel):
    """Configuration for the Selenium driver."""

    # Selenium Grid / standalone server, e.g. http://localhost:4444/wd/hub
    remote_url: str | None = None
    page_load_timeout: float | None = Field(default=None, gt=0)
    script_timeout: float | None = Field(default=None, gt=0)

    @property
    def is_remote(self) -> bool:
        return bool(self.remote_url)
