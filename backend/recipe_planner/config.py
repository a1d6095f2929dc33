from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "recipe-planner"
    version: str = "1.0.0"
    env: str = "local"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./database.sqlite"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Any OpenAI-compatible chat-completions endpoint works; default is the Hugging Face router.
    llm_provider: str = "openai"
    llm_model: str = "openai/gpt-oss-120b:fastest"
    llm_api_base: str = "https://router.huggingface.co/v1"
    llm_api_key: str = ""
    llm_temperature: float = 0.7
    llm_timeout_s: int = 60
    llm_max_tokens: int = 2048

    # Language the generated cooking instructions are written in.
    recipe_details_language: str = "Vietnamese"

    class Config:
        env_file = ".env"


settings = Settings()
