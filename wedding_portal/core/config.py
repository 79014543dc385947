from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Tiny Diner"
    BUSINESS_TIMEZONE: str = "America/Chicago"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    ADMIN_API_KEY: str | None = None
    ADMIN_SENDER_NAME: str = "Tiny Diner Admin"

    # Calendar inputs, ISO dates. Weekdays use date.weekday(): Thursday=3 .. Saturday=5
    ALLOWED_EVENT_WEEKDAYS: list[int] = [3, 4, 5]
    BOOKED_DATES: list[str] = ["2024-11-09", "2024-11-23", "2024-12-07", "2025-01-18"]
    HOLD_DATES: list[str] = ["2024-11-16", "2024-12-14", "2025-02-08"]

    # "json" persists one file per request; "memory" is for throwaway instances
    BOOKING_STORE: str = "json"
    BOOKING_DATA_DIR: str = "./data/bookings"

    HONEYBOOK_API_KEY: str | None = None
    HONEYBOOK_BASE_URL: str = "https://api.honeybook.com/v1"

    SQUARE_ACCESS_TOKEN: str | None = None
    SQUARE_LOCATION_ID: str | None = None
    SQUARE_BASE_URL: str = "https://connect.squareup.com/v2"

    EMAIL_API_KEY: str | None = None
    EMAIL_SEND_ENDPOINT: str = "https://api.sendgrid.com/v3/mail/send"
    EMAIL_FROM_ADDRESS: str = "events@tinydiner.com"


settings = Settings()
