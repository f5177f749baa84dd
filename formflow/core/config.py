from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FormFlowSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FORMFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment (drives log renderer and default log level)
    environment: str = Field(default="development")
    log_level: str = Field(default="")

    # Request field naming
    transition_key_template: str = Field(default="flow_{flow_name}_transition")
    form_name_template: str = Field(default="{flow_name}_step_{step_number}")

    # Transition markers carried by the transition key
    forwards_marker: str = Field(default="1")
    backwards_marker: str = Field(default="0")
    step_separator: str = Field(default=":")
    complete_marker: str = Field(default="complete")
    reset_marker: str = Field(default="reset")

    # Redis (flow context storage)
    redis_url: str = Field(default="redis://localhost:6379")
    storage_key_prefix: str = Field(default="formflow")
    storage_ttl_seconds: int = Field(default=3600, gt=0)

    @model_validator(mode="after")
    def validate_distinct_markers(self):
        """Markers share one input field, so they must not collide"""
        markers = [
            self.forwards_marker,
            self.backwards_marker,
            self.complete_marker,
            self.reset_marker,
        ]
        if any(not marker for marker in markers):
            raise ValueError("Transition markers must not be empty")
        if len(set(markers)) != len(markers):
            raise ValueError(
                f"Transition markers must be distinct, got {markers}"
            )
        if not self.step_separator:
            raise ValueError("step_separator must not be empty")
        return self

    def transition_key_for(self, flow_name: str) -> str:
        return self.transition_key_template.format(flow_name=flow_name)

    def form_name_for(self, flow_name: str, step_number: int) -> str:
        return self.form_name_template.format(
            flow_name=flow_name, step_number=step_number
        )


settings = FormFlowSettings()
