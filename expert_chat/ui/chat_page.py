"""NiceGUI chat interface driven by the conversation manager."""

import logging
import os
from collections.abc import Callable

from nicegui import app, ui

from expert_chat.agent.prompts import EXPERT_METADATA, get_expert_metadata
from expert_chat.chat.client import ProxyClient
from expert_chat.chat.config import get_client_config
from expert_chat.chat.conversation import ConversationManager
from expert_chat.chat.events import ChatEvent, ChatEventKind
from expert_chat.chat.messages import Message
from expert_chat.chat.preferences import ChatPreferences, PreferenceRepository, StorageKey
from expert_chat.models.schemas import MessageRole, ReasoningEffort, Verbosity
from expert_chat.ui.formatting import markdown_to_html

logger = logging.getLogger(__name__)

REASONING_OPTIONS = {
    ReasoningEffort.MINIMAL: "Fastest responses, best for simple queries and quick answers",
    ReasoningEffort.LOW: "Quick reasoning, good for straightforward tasks",
    ReasoningEffort.MEDIUM: "Balanced performance - recommended for most expert conversations",
    ReasoningEffort.HIGH: "Deep reasoning for complex, multi-step problems",
}

VERBOSITY_OPTIONS = {
    Verbosity.LOW: "Concise, brief responses with essential information",
    Verbosity.MEDIUM: "Standard detail level with balanced explanations",
    Verbosity.HIGH: "Thorough explanations with examples and detailed context",
}

EXAMPLE_QUESTIONS = [
    ("Product Launch", "How do I launch my new product successfully?"),
    ("Customer Acquisition", "What's the best way to acquire my first 100 customers?"),
    ("Content Strategy", "Help me create a content marketing strategy"),
    ("Paid Advertising", "How can I improve my Facebook ads performance?"),
]

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #f97316 0%, #db2777 100%); }

    .message-user {
        background: linear-gradient(135deg, #f97316 0%, #db2777 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-streaming { border: 1px dashed #f97316; }

    .avatar-user { background: linear-gradient(135deg, #f97316 0%, #db2777 100%); }
    .avatar-assistant { background: #6b7280; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #f97316;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
    }
    .input-box:focus-within { border-color: #f97316; }

    .example-card { cursor: pointer; transition: border-color 0.2s; }
    .example-card:hover { border-color: #f97316; }
</style>
"""

# Events after which the whole message list is rebuilt
REBUILD_EVENTS = (
    ChatEventKind.MESSAGE_SENT,
    ChatEventKind.STREAMING_STARTED,
    ChatEventKind.STREAMING_ENDED,
)


def render_event(
    event: ChatEvent,
    bubbles: dict[str, ui.html],
    refresh: Callable[[], None],
    scroll_to_bottom: Callable[[], None],
) -> None:
    """Apply one conversation event to the rendered message list.

    Content writes update the matching bubble in place. A write to a message
    that has no bubble yet, and every structural change, rebuilds the list.
    Either way the view follows the newest content.

    Args:
        event: Event fired by the conversation manager.
        bubbles: Rendered assistant bubbles by message id.
        refresh: Rebuilds the message list.
        scroll_to_bottom: Scrolls the message area to its end.
    """
    if event.kind == ChatEventKind.MESSAGE_UPDATED and event.message is not None:
        bubble = bubbles.get(event.message.id)
        if bubble is not None:
            bubble.set_content(markdown_to_html(event.message.content))
        else:
            refresh()
    elif event.kind in REBUILD_EVENTS:
        refresh()
    else:
        return
    scroll_to_bottom()


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    config = get_client_config()
    manager = ConversationManager(ProxyClient(config), reveal_delay=config.reveal_delay)
    preference_repo = PreferenceRepository(app.storage.user)
    prefs = preference_repo.load()

    # Assistant bubbles by message id, updated in place during a reveal
    bubbles: dict[str, ui.html] = {}

    scroll_area: ui.scroll_area
    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_typing_dots() -> None:
        with ui.row().classes("items-center gap-2"):
            with ui.row().classes("gap-1"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")
            ui.label("Analyzing your request...").classes("text-sm text-gray-500 italic")

    def render_message(msg: Message) -> None:
        is_user = msg.role == MessageRole.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        if msg.is_streaming:
            bubble += " message-streaming"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if msg.is_streaming and not msg.content:
                        render_typing_dots()
                    elif is_user:
                        content = msg.content.replace("\n", "<br>")
                        ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
                    else:
                        bubbles[msg.id] = ui.html(
                            markdown_to_html(msg.content), sanitize=False
                        ).classes("text-sm leading-relaxed")
                ui.label(msg.timestamp.strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def render_welcome() -> None:
        expert = get_expert_metadata(prefs.expert_type)
        with ui.column().classes("w-full items-center gap-4 py-8"):
            ui.label(expert.icon).classes("text-5xl")
            ui.label("Welcome to AI Expert Chat").classes("text-xl font-semibold text-gray-700")
            ui.label(
                f"Ready to provide {expert.label.lower()} guidance tailored to your needs."
            ).classes("text-sm text-gray-500")
            with ui.grid(columns=2).classes("w-full gap-3 mt-2"):
                for category, question in EXAMPLE_QUESTIONS:
                    with ui.card().classes("example-card").on(
                        "click", lambda q=question: send(q)
                    ):
                        ui.label(category).classes("text-xs text-orange-600 font-medium")
                        ui.label(question).classes("text-sm text-gray-700")

    def refresh_messages() -> None:
        bubbles.clear()
        messages_container.clear()
        with messages_container:
            messages = manager.messages
            if not messages:
                render_welcome()
            for msg in messages:
                render_message(msg)

    def update_composer() -> None:
        if manager.is_loading:
            send_btn.disable()
        else:
            send_btn.enable()

    def scroll_to_bottom() -> None:
        scroll_area.scroll_to(percent=1.0)

    def on_chat_event(event: ChatEvent) -> None:
        render_event(event, bubbles, refresh_messages, scroll_to_bottom)
        if event.kind in REBUILD_EVENTS:
            update_composer()
        elif event.kind == ChatEventKind.ERROR:
            ui.notify(str(event.error), type="negative")

        if event.kind == ChatEventKind.MESSAGE_SENT:
            logger.info(f"Message sent: {event.text!r}")
        elif event.kind == ChatEventKind.MESSAGE_RECEIVED:
            logger.info(f"Message received ({len(event.text or '')} chars)")

    unsubscribe = manager.subscribe(on_chat_event)

    async def send(text: str) -> None:
        if manager.is_loading:
            return
        input_field.value = ""
        await manager.send_message(
            text, prefs.expert_type.value, prefs.reasoning_effort, prefs.verbosity
        )

    async def send_from_input() -> None:
        await send(input_field.value or "")

    def new_chat() -> None:
        manager.clear_conversation()
        refresh_messages()

    def set_preference(key: StorageKey, value: str) -> None:
        if value is None:
            return
        preference_repo.save(key, value)
        loaded = preference_repo.load()
        prefs.reasoning_effort = loaded.reasoning_effort
        prefs.verbosity = loaded.verbosity
        prefs.expert_type = loaded.expert_type
        logger.info(f"Settings changed: {key.value}={value}")
        if not manager.messages:
            refresh_messages()

    def on_disconnect() -> None:
        manager.reset_streaming_state()
        unsubscribe()

    ui.context.client.on_disconnect(on_disconnect)

    # === Settings Dialog ===
    defaults = ChatPreferences()
    with ui.dialog() as settings_dialog, ui.card().classes("w-[480px] max-w-full gap-4"):
        ui.label("Model Settings").classes("text-lg font-semibold")
        ui.label("Configure AI behavior and response preferences").classes(
            "text-sm text-gray-500"
        )

        ui.label("Reasoning Effort").classes("font-medium")
        reasoning_toggle = ui.toggle(
            {option.value: option.value.capitalize() for option in REASONING_OPTIONS},
            value=prefs.reasoning_effort.value,
            on_change=lambda e: set_preference(StorageKey.REASONING_EFFORT, e.value),
        )
        ui.label().bind_text_from(
            prefs, "reasoning_effort", lambda v: REASONING_OPTIONS[ReasoningEffort(v)]
        ).classes("text-xs text-gray-500")

        ui.label("Verbosity").classes("font-medium")
        verbosity_toggle = ui.toggle(
            {option.value: option.value.capitalize() for option in VERBOSITY_OPTIONS},
            value=prefs.verbosity.value,
            on_change=lambda e: set_preference(StorageKey.VERBOSITY, e.value),
        )
        ui.label().bind_text_from(
            prefs, "verbosity", lambda v: VERBOSITY_OPTIONS[Verbosity(v)]
        ).classes("text-xs text-gray-500")

        def reset_defaults() -> None:
            reasoning_toggle.value = defaults.reasoning_effort.value
            verbosity_toggle.value = defaults.verbosity.value

        with ui.row().classes("w-full justify-end gap-2"):
            ui.button("Reset to Defaults", on_click=reset_defaults).props("flat")
            ui.button("Done", on_click=settings_dialog.close)

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("bolt").classes("text-white text-3xl")
                with ui.column().classes("gap-0"):
                    ui.label().bind_text_from(
                        prefs, "expert_type", lambda v: f"AI {get_expert_metadata(v).label}"
                    ).classes("text-lg font-semibold text-white")
                    ui.label().bind_text_from(
                        prefs, "expert_type", lambda v: get_expert_metadata(v).description
                    ).classes("text-xs text-white/80")
            with ui.row().classes("items-center gap-2"):
                for field, title in (("reasoning_effort", "Reasoning"), ("verbosity", "Verbosity")):
                    with ui.element("div").classes("bg-white/20 rounded-full px-3 py-1"):
                        ui.label().bind_text_from(
                            prefs, field, lambda v, t=title: f"{t}: {v.value}"
                        ).classes("text-xs text-white/90")
                ui.button(icon="settings", on_click=settings_dialog.open).props(
                    "flat round color=white"
                )
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Expert selector
        with ui.row().classes("w-full px-5 py-2 items-center gap-3 border-b"):
            ui.label("Expert:").classes("text-sm font-medium")
            ui.select(
                {key.value: f"{meta.icon} {meta.label}" for key, meta in EXPERT_METADATA.items()},
                value=prefs.expert_type.value,
                on_change=lambda e: set_preference(StorageKey.EXPERT_TYPE, e.value),
            ).props("dense borderless")

        # Messages
        with ui.element("div").classes("relative flex-grow w-full"):
            scroll_area = ui.scroll_area().classes("absolute inset-0 bg-gray-50")
            with scroll_area, ui.column().classes("w-full p-5"):
                messages_container = ui.column().classes("w-full gap-4")
            ui.button(icon="keyboard_arrow_down", on_click=scroll_to_bottom).props(
                "round dense unelevated color=white text-color=grey-8"
            ).classes("absolute bottom-3 right-3 shadow").tooltip("Scroll to bottom")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(
                        placeholder=f"Ask me anything about {get_expert_metadata(prefs.expert_type).label.lower()}..."
                    )
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send_from_input)
                )
            send_btn = (
                ui.button(icon="send", on_click=send_from_input)
                .props("round unelevated")
                .classes("bg-orange-500")
            )

    refresh_messages()


def main() -> None:
    ui.run(
        title="Expert Chat",
        port=int(os.getenv("UI_PORT", "8080")),
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "expert-chat-secret"),
    )


if __name__ == "__main__":
    main()
