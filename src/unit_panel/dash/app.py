from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.timer import Timer
from textual.widgets import Button, DataTable, Footer, Input, Label, RichLog

from ..controller import ServiceController
from ..models import FilterState, ServiceRecord, StatusFilter
from ..systemctl import Action, Systemctl


STATUS_BUTTONS: tuple[StatusFilter, ...] = (
    StatusFilter.RUNNING,
    StatusFilter.EXITED,
    StatusFilter.DEAD,
    StatusFilter.ACTIVE,
    StatusFilter.INACTIVE,
)


@dataclass(slots=True)
class AppState:
    filters: FilterState = field(default_factory=FilterState)
    selected_name: str | None = None


class UnitPanelApp(App):
    CSS_PATH = Path(__file__).with_name("app.tcss")
    TITLE = "Systemd Service Panel"
    BINDINGS = [
        Binding("s", "do_start", "Start"),
        Binding("x", "do_stop", "Stop"),
        Binding("r", "do_restart", "Restart"),
        Binding("l", "do_reload", "Reload"),
        Binding("/", "focus_search", "Search"),
        Binding("ctrl+r", "do_refresh", "Refresh"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, controller: ServiceController) -> None:
        super().__init__()
        self.controller = controller
        self.state = AppState()
        self.table: DataTable | None = None
        self.log_widget: RichLog | None = None
        self.notice: Label | None = None
        self._rows: list[str] = []  # row index -> unit name
        self._search_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal():
                yield Label("Systemd Service Panel", id="title")
                yield Button("Refresh", id="refresh")
            yield Input(placeholder="Filter services by name...", id="search")
            with Horizontal(id="status-row"):
                yield Label("Status:")
                for status in STATUS_BUTTONS:
                    yield Button(status.value, id=f"status-{status.value}", variant="default")

        with Container(id="content"):
            self.notice = Label("", id="notice")
            yield self.notice
            self.table = DataTable(zebra_stripes=True, cursor_type="row")
            self.table.add_columns("Name", "Description", "Active", "Sub")
            yield self.table
            self.log_widget = RichLog(highlight=False, markup=False, wrap=True, id="messages")
            yield self.log_widget

        yield Footer()

    def on_mount(self) -> None:
        self._render_view()
        self.action_do_refresh()

    def visible_records(self) -> list[ServiceRecord]:
        return self.controller.visible(self.state.filters)

    def _render_view(self) -> None:
        assert self.table and self.notice
        store = self.controller.store
        visible = self.visible_records()

        lines: list[str] = []
        if store.error:
            lines.append(f"Error: {store.error}")
        if store.loading:
            lines.append("Loading services...")
        elif not store.records():
            lines.append("No services found or unable to load services.")
        elif not visible:
            lines.append("No services match the current filters.")
        self.notice.update("\n".join(lines))

        self.table.clear(columns=False)
        self._rows = []
        for rec in visible:
            self.table.add_row(rec.name, rec.description, rec.active_state, rec.sub_state)
            self._rows.append(rec.name)
        # try keep selection
        if self.state.selected_name in self._rows:
            self.table.move_cursor(row=self._rows.index(self.state.selected_name))

        self._render_status_buttons()

    def _render_status_buttons(self) -> None:
        selected = self.state.filters.status
        for status in STATUS_BUTTONS:
            button = self.query_one(f"#status-{status.value}", Button)
            button.variant = "primary" if status is selected else "default"

    def _selected_name(self) -> str | None:
        if not self.table:
            return None
        row = self.table.cursor_row
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def _note(self, msg: str) -> None:
        assert self.log_widget
        self.log_widget.write(msg)

    @on(DataTable.RowHighlighted)
    def _on_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        row = event.cursor_row
        if 0 <= row < len(self._rows):
            self.state.selected_name = self._rows[row]

    @on(Input.Changed, "#search")
    def _on_search_changed(self, event: Input.Changed) -> None:
        # Update state immediately but debounce table rebuilds
        self.state.filters.name = event.value
        if self._search_timer is not None:
            self._search_timer.stop()
        self._search_timer = self.set_timer(0.2, self._render_view)

    @on(Button.Pressed, "#refresh")
    def _on_refresh_pressed(self) -> None:
        self.action_do_refresh()

    @on(Button.Pressed)
    def _on_status_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("status-"):
            return
        self.toggle_status(StatusFilter(button_id[len("status-"):]))

    def toggle_status(self, status: StatusFilter) -> None:
        self.state.filters.toggle(status)
        self._render_view()

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_do_refresh(self) -> None:
        if self.controller.busy:
            self._note("[note] a refresh is already running")
            return
        self.controller.store.begin_refresh()
        self._render_view()
        self._refresh_worker()

    @work(exclusive=True, group="systemctl")
    async def _refresh_worker(self) -> None:
        await self.controller.refresh_async()
        self._render_view()

    def _dispatch(self, action: Action) -> None:
        name = self._selected_name()
        if not name:
            return
        if self.controller.busy:
            self._note("[note] another operation is still running")
            return
        self._note(f"$ systemctl {action} {name}")
        self.controller.store.begin_refresh()
        self._render_view()
        self._mutation_worker(action, name)

    @work(exclusive=True, group="systemctl")
    async def _mutation_worker(self, action: Action, name: str) -> None:
        result = await self.controller.mutate_async(action, name)
        if result.ok:
            self._note(f"{action} {name}: ok")
        else:
            self._note(f"{action} {name}: {result.error}")
        self._render_view()

    def action_do_start(self) -> None:
        self._dispatch("start")

    def action_do_stop(self) -> None:
        self._dispatch("stop")

    def action_do_restart(self) -> None:
        self._dispatch("restart")

    def action_do_reload(self) -> None:
        self._dispatch("reload")


def run_dash(systemctl: Systemctl | None = None) -> None:
    app = UnitPanelApp(ServiceController(systemctl=systemctl))
    app.run()
