"""Modal screens for the TUI.

This module hides the design decisions about:
- How provider settings are presented and edited
- When the model picker switches between a list and free text
- Keyboard shortcuts for dialogs

To change how settings look, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Select, Static

from ..llm import ProviderKind, create_llm_provider
from ..session import ChatSessionController, SessionEvent
from .formatting import format_model_option, model_count_text, server_hint_text
from .styles import SETTINGS_CSS


class SettingsScreen(ModalScreen[None]):
    """Modal dialog editing the session's provider settings.

    Every edit is applied to the controller immediately; the dialog
    re-renders from controller events so it always shows live state.
    """

    CSS = SETTINGS_CSS

    BINDINGS = [
        Binding("escape", "close", "Close", show=False),
        Binding("ctrl+r", "refresh_models", "Refresh models", show=False),
    ]

    def __init__(self, controller: ChatSessionController) -> None:
        super().__init__()
        self._controller = controller

    def compose(self) -> ComposeResult:
        settings = self._controller.settings
        provider_options = [
            (create_llm_provider(kind).display_name, kind.value) for kind in ProviderKind
        ]
        with Vertical(id="settings-dialog"):
            yield Static("AI Provider", id="settings-title")

            yield Static("Provider Type", classes="settings-label")
            yield Select(
                provider_options,
                value=settings.provider.value,
                allow_blank=False,
                id="provider-select",
            )

            yield Static("Base URL", classes="settings-label")
            yield Input(
                value=settings.base_url,
                placeholder=create_llm_provider(settings.provider).default_base_url,
                id="base-url-input",
            )

            yield Static("Model Name", classes="settings-label")
            with Horizontal(id="model-row"):
                yield Select([], prompt="Select a model", id="model-select")
                yield Input(value=settings.model, placeholder="llama2", id="model-input")
                yield Button("Refresh", id="refresh-models", variant="primary").with_tooltip(
                    "Refresh models (Ctrl+R)"
                )
            yield Static("", id="model-info")

            yield Static("", id="settings-hint")
            with Horizontal(id="settings-buttons"):
                yield Button("Close", id="close-settings", variant="success")

    def on_mount(self) -> None:
        self._controller.add_listener(self._on_session_event)
        self._render_models()
        self._render_settings()

    def on_unmount(self) -> None:
        self._controller.remove_listener(self._on_session_event)

    def _on_session_event(self, event: SessionEvent) -> None:
        if event is SessionEvent.MODELS:
            self._render_models()
        elif event is SessionEvent.SETTINGS:
            self._render_settings()

    def _render_settings(self) -> None:
        settings = self._controller.settings

        provider_select = self.query_one("#provider-select", Select)
        if provider_select.value != settings.provider.value:
            provider_select.value = settings.provider.value

        base_input = self.query_one("#base-url-input", Input)
        if base_input.value != settings.base_url:
            base_input.value = settings.base_url

        model_input = self.query_one("#model-input", Input)
        if model_input.value != settings.model:
            model_input.value = settings.model

        model_select = self.query_one("#model-select", Select)
        names = {m.name for m in self._controller.models}
        if settings.model in names and model_select.value != settings.model:
            model_select.value = settings.model

        self.query_one("#settings-hint", Static).update(server_hint_text(settings))

    def _render_models(self) -> None:
        models = self._controller.models
        loading = self._controller.is_loading_models

        model_select = self.query_one("#model-select", Select)
        model_select.set_options([(format_model_option(m), m.name) for m in models])
        model_select.display = bool(models)
        self.query_one("#model-input", Input).display = not models

        refresh = self.query_one("#refresh-models", Button)
        refresh.disabled = loading
        refresh.label = "Loading..." if loading else "Refresh"

        info = self.query_one("#model-info", Static)
        info.update(model_count_text(len(models)) if models else "")

        current = self._controller.settings.model
        if any(m.name == current for m in models):
            model_select.value = current

    def on_select_changed(self, event: Select.Changed) -> None:
        if not isinstance(event.value, str):
            return
        settings = self._controller.settings
        if event.select.id == "provider-select" and event.value != settings.provider.value:
            self._controller.switch_provider(event.value)
        elif event.select.id == "model-select" and event.value != settings.model:
            self._controller.update_settings(model=event.value)

    def on_input_changed(self, event: Input.Changed) -> None:
        settings = self._controller.settings
        if event.input.id == "base-url-input" and event.value != settings.base_url:
            self._controller.update_settings(base_url=event.value)
        elif event.input.id == "model-input" and event.value != settings.model:
            self._controller.update_settings(model=event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "refresh-models":
            self.action_refresh_models()
        elif event.button.id == "close-settings":
            self.action_close()

    def action_refresh_models(self) -> None:
        if not self._controller.is_loading_models:
            self.run_worker(self._controller.refresh_models(), group="models")

    def action_close(self) -> None:
        self.dismiss(None)
