class Settings:
    PROJECT_NAME: str = "practest"
    DEBUG: bool = False
    LOG_DIR: str = "log"
    LOG_FILE: str = "practest.log"
    LOG_TO_FILE: bool = True
    QUESTIONS_DIR: str = "questions"
    TOPICS: tuple = (
        "rights",
        "history",
        "government",
        "geography",
        "symbols",
        "economy",
        "law",
        "indigenous",
    )
    TEST_SIZE: int = 20
    BALANCED: bool = True


settings = Settings()
