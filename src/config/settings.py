from pydantic_settings import BaseSettings
from pydantic import Field
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # Bot token
    telegram_bot_token: str = Field(default=os.getenv("TELEGRAM_BOT_TOKEN", ""))

    # Logging
    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    # Text that cancels any pending questions
    cancel_command: str = Field(default=os.getenv("CANCEL_COMMAND", "/cancel"))

    # Let PTB process updates concurrently; questions stay serialized per conversation
    concurrent_updates: bool = Field(default=os.getenv("CONCURRENT_UPDATES", "false").lower() == "true")

    class Config:
        env_file = ".env"

settings = Settings()
