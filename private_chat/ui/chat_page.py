"""NiceGUI chat interface over the chat orchestrator."""

import logging

from nicegui import events, ui

from private_chat.chat.orchestrator import ChatOrchestrator, get_orchestrator
from private_chat.models.session import UserMessage
from private_chat.parsing.extraction import ExtractionError

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 0.2
ACCEPTED_FILES = ".pdf,.txt,.md,.csv,.json,image/*"

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; }
    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .session-active { background: #e0e7ff; }
</style>
"""


def _tool_caption(orchestrator: ChatOrchestrator) -> str:
    if orchestrator.file_processing:
        return "Processing file..."
    if attachment := orchestrator.attached_file:
        return f"Attached: {attachment.name}"
    if orchestrator.web_search_enabled:
        return "Web search on"
    return ""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    orchestrator = get_orchestrator()
    store = orchestrator.store

    input_field: ui.input
    send_btn: ui.button
    web_switch: ui.switch
    tool_label: ui.label

    @ui.refreshable
    def session_list() -> None:
        active_id = store.active_session_id
        for session in store.list_sessions():
            row_classes = "w-full items-center justify-between rounded no-wrap"
            if session.id == active_id:
                row_classes += " session-active"
            with ui.row().classes(row_classes):
                ui.button(session.title, on_click=lambda s=session.id: select(s)).props(
                    "flat dense no-caps align=left"
                ).classes("flex-grow truncate")
                ui.button(icon="delete", on_click=lambda s=session.id: delete(s)).props(
                    "flat dense round size=sm"
                )

    @ui.refreshable
    def message_list() -> None:
        messages = store.get_messages(store.active_session_id)
        if not messages:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label("Start a conversation").classes("text-lg text-gray-400")
            return
        for message in messages:
            is_user = isinstance(message, UserMessage)
            with ui.chat_message(name="You" if is_user else "AI", sent=is_user):
                if is_user:
                    ui.label(message.content).classes("whitespace-pre-wrap")
                elif message.content:
                    ui.markdown(message.content)
                else:
                    ui.spinner("dots")
        if orchestrator.is_loading and isinstance(messages[-1], UserMessage):
            with ui.chat_message(name="AI"):
                ui.spinner("dots")

    def sync_controls() -> None:
        blocked = (
            not orchestrator.engine_ready
            or orchestrator.is_loading
            or orchestrator.file_processing
        )
        input_field.set_enabled(not blocked)
        send_btn.set_enabled(not blocked)
        web_switch.value = orchestrator.web_search_enabled
        tool_label.set_text(_tool_caption(orchestrator))

    def tick() -> None:
        if orchestrator.is_loading:
            message_list.refresh()
            session_list.refresh()
        sync_controls()

    def select(session_id: str) -> None:
        orchestrator.select_session(session_id)
        session_list.refresh()
        message_list.refresh()

    def delete(session_id: str) -> None:
        orchestrator.delete_session(session_id)
        session_list.refresh()
        message_list.refresh()

    def new_chat() -> None:
        orchestrator.new_session()
        session_list.refresh()
        message_list.refresh()

    async def send_message() -> None:
        text = input_field.value or ""
        if not orchestrator.can_submit(text):
            return
        input_field.value = ""
        await orchestrator.submit(text)
        session_list.refresh()
        message_list.refresh()
        sync_controls()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        try:
            attachment = await orchestrator.attach_file(e.file.name, e.file.content_type, data)
        except ExtractionError as err:
            logger.warning(f"Upload of {e.file.name} rejected: {err}")
            ui.notify("File processing failed", type="negative")
        else:
            if attachment is not None:
                ui.notify(f"Attached {attachment.name}", type="positive")
        finally:
            uploader.reset()
            sync_controls()

    def toggle_web_search(e: events.ValueChangeEventArguments) -> None:
        orchestrator.set_web_search(bool(e.value))
        tool_label.set_text(_tool_caption(orchestrator))

    # === UI Layout ===
    with ui.row().classes("w-full h-screen p-4 gap-4 no-wrap"):
        # Sidebar
        with ui.column().classes("w-64 h-full app-container p-3 gap-2"):
            ui.button("New chat", icon="add", on_click=new_chat).classes("w-full")
            with ui.scroll_area().classes("flex-grow w-full"):
                session_list()

        # Chat
        with ui.column().classes("flex-grow h-full app-container gap-0"):
            with ui.row().classes("w-full px-5 py-3 items-center justify-between border-b"):
                ui.label("Private AI Chat").classes("text-lg font-semibold")
                ui.label().bind_text_from(orchestrator, "status_text").classes(
                    "text-xs text-gray-500"
                )

            with (
                ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
                ui.column().classes("w-full p-5"),
            ):
                message_list()

            with ui.column().classes("w-full p-4 gap-2 border-t"):
                with ui.row().classes("w-full items-center gap-3"):
                    uploader = (
                        ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                        .props(f'accept="{ACCEPTED_FILES}" flat dense')
                        .classes("w-48")
                    )
                    web_switch = ui.switch("Web search", on_change=toggle_web_search)
                    tool_label = ui.label().classes("text-xs text-gray-500")
                with ui.row().classes("w-full items-center gap-3 no-wrap"):
                    input_field = (
                        ui.input(placeholder="Type a message...")
                        .props("outlined dense")
                        .classes("flex-grow")
                        .on("keydown.enter", send_message)
                    )
                    send_btn = ui.button(icon="send", on_click=send_message).props(
                        "round unelevated"
                    )

    sync_controls()
    ui.timer(REFRESH_INTERVAL, tick)
