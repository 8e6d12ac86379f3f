import os
from pydantic import BaseModel, Field

from .adapters.multicall import MULTICALL3
from .services.balances import DEFAULT_CHUNK_SIZE


class AppConfig(BaseModel):
    rpc_url: str = Field(default_factory=lambda: os.getenv("RPC_URL", "https://bsc-dataseed1.ninicoin.io"))
    chunk_size: int = Field(default_factory=lambda: int(os.getenv("CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE))), ge=1)
    multicall_address: str = Field(default_factory=lambda: os.getenv("MULTICALL_ADDRESS", MULTICALL3))
    call_timeout: float = Field(default_factory=lambda: float(os.getenv("CALL_TIMEOUT", "30.0")))

    debug: bool = Field(default_factory=lambda: os.getenv("DEBUG", "false").lower() != "false")
    log_file: str = Field(default_factory=lambda: os.getenv("LOG_FILE", "").strip())


def load_env() -> AppConfig:
    from dotenv import load_dotenv
    load_dotenv()
    return AppConfig()
