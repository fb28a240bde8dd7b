# alicloud_admission/models/settings.py

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AdmissionSettings(BaseSettings):
    """
    Pydantic settings for the admission validators.
    By default, these fields map to environment variables prefixed with
    `ALICLOUD_ADMISSION_`, e.g. `ALICLOUD_ADMISSION_DUAL_STACK_REGIONS`.
    List values are given as JSON, e.g. '["cn-hangzhou", "cn-beijing"]'.
    """

    dual_stack_regions: List[str] = []
    # None => the enhanced NAT gateway zone check is skipped
    nat_gateway_zones: Optional[List[str]] = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="ALICLOUD_ADMISSION_")
