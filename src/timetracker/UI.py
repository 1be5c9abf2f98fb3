import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Footer, Header

from .clock import ClockInterface, WallClock
from .registry import Registry, TIMER_KEYS
from .timer_row import TimerRow

log = logging.getLogger(__name__)

TICK_INTERVAL = 1.0    # seconds

def titled(
    w: Widget, /, title: str,
    style = ('round', '#999'), padding = (0, 1),
):
    w.styles.border = style
    w.border_title = title
    w.styles.padding = padding
    return w

class UI(App):
    CSS_PATH = "styles.tcss"
    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("z", "zero_all", "Zero all"),
        *(
            Binding(key, f"toggle({key!r})", "Toggle", show=False)
            for key in TIMER_KEYS
        ),
    ]

    def __init__(
        self,
        registry: Registry,
        clock: ClockInterface | None = None,
        color: bool = True,
        source_name: str = '',
        tick_interval: float = TICK_INTERVAL,
    ) -> None:
        '''
        `color` only affects the running-timer highlight.
        `source_name` is shown in the header and as the board title.
        '''
        super().__init__()

        self.registry = registry
        self.time_source = clock or WallClock()
        self.use_color = color
        self.source_name = source_name
        self.tick_interval = tick_interval

        self.rows: list[TimerRow] = [
            TimerRow(
                registry.keyForIndex(i), timer.name, color=color,
                id=f'timer-{i}', classes='timer-row',
            ) for i, timer in enumerate(registry)
        ]

        self.title = "timetracker"
        self.sub_title = source_name

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with titled(VerticalScroll(id='board'), self.source_name or 'Timers'):
            yield from self.rows
        yield Footer(compact=True)

    def on_mount(self) -> None:
        self.myUpdate(self.time_source.now())
        self.set_interval(self.tick_interval, self.onTick)

    def onTick(self) -> list[int]:
        now = self.time_source.now()
        expired = self.registry.tickAll(now)
        if expired:
            self.bell()
            for i in expired:
                self.notify(
                    f'{self.registry[i].name} is done.', title='Time is up',
                )
        self.myUpdate(now)
        return expired

    def myUpdate(self, now: int) -> None:
        '''
        Redraw every row against the single instant `now`.
        '''
        for timer, row in zip(self.registry, self.rows):
            row.remaining = timer.peek(now)
            row.running = timer.isRunning()

    def action_toggle(self, key: str) -> None:
        now = self.time_source.now()
        if self.registry.dispatch(key, now):
            self.myUpdate(now)

    def action_zero_all(self) -> None:
        self.registry.zeroAll()
        self.myUpdate(self.time_source.now())

    def boardText(self) -> list[str]:
        return [row.plainText() for row in self.rows]
