"""Data models for the widget configuration.

These models mirror the deployment-time template that parameterizes the
widget. Keys are camelCase on disk, snake_case in Python.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _TemplateModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class CssConfig(_TemplateModel):
    """Style block of the widget template."""

    primary_color: str = Field(default="#0070f3", description="Main accent color")
    secondary_color: str = Field(default="#00dddd", description="Secondary accent color")
    message_radius: str = Field(default="18px", description="Corner radius of message bubbles")
    input_radius: str = Field(default="20px", description="Corner radius of the input box")
    show_typing_indicator: bool = Field(default=True)
    chat_width: str = Field(default="400px")
    chat_height: str = Field(default="600px")
    font_family: str = Field(default="Arial, sans-serif")
    font_size: str = Field(default="16px")
    dark_mode: bool = Field(default=False)


class BotConfig(_TemplateModel):
    """Display strings and toggles of the widget template.

    Read-only at runtime. `initial_suggestions`, `enable_voice_input` and
    `response_delay` are carried for the template's sake; no widget logic
    reads them.
    """

    page_title: str = Field(default="Chat")
    main_heading: str = Field(default="Asistente virtual")
    sub_heading: str = Field(default="")
    input_placeholder: str = Field(default="Escribe tu mensaje aquí...")
    submit_button_text: str = Field(default="Enviar")
    welcome_message: str = Field(
        default="¡Hola! Soy tu asistente. ¿En qué puedo ayudarte hoy?"
    )
    error_message: str = Field(
        default="Disculpa, estoy teniendo problemas. ¿Podrías intentarlo de nuevo?"
    )
    rating_url: str = Field(default="https://example.com/rating")
    rating_prompt: str = Field(
        default="Agradeceríamos mucho que evaluara nuestro servicio："
    )
    rating_link_text: str = Field(default="点击这里评价")
    initial_suggestions: list[str] = Field(default_factory=list)
    show_branding: bool = Field(default=True)
    enable_voice_input: bool = Field(default=False)
    response_delay: int = Field(default=1000, ge=0, description="Milliseconds")
    css_config: CssConfig = Field(default_factory=CssConfig)
