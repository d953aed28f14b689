import os
from dataclasses import dataclass


@dataclass
class Settings:
    data_dir: str = os.getenv("PRESENTO_DATA_DIR", "./presento-data")
    slides_key: str = os.getenv("PRESENTO_SLIDES_KEY", "presento-slides")
    name_key: str = os.getenv("PRESENTO_NAME_KEY", "presento-name")
    log_level: str = os.getenv("PRESENTO_LOG_LEVEL", "INFO")


settings = Settings()
