from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Clientes API"

    # Backing file, relative to the working directory
    DATA_FILE: str = "./data/clientes.json"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CLIENTES_",
        case_sensitive=True
    )

settings = Settings()
