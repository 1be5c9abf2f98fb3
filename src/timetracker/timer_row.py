from rich.text import Text
from textual.reactive import reactive
from textual.app import RenderResult
from textual.widget import Widget

from .timer import formatRemaining

RUNNING_STYLE = 'bold red'

def formatRow(key: str, remaining: int, name: str) -> str:
    return f'[{key}]  {formatRemaining(remaining)}  {name}'

class TimerRow(Widget):
    remaining: reactive[int] = reactive(0)
    running: reactive[bool] = reactive(False)

    def __init__(
        self, key: str, name: str, color: bool = True, *args, **kw,
    ) -> None:
        '''
        `color`: when False, running rows are drawn exactly like stopped ones.
        '''
        super().__init__(*args, **kw)

        self.timer_key = key
        self.timer_name = name
        self.use_color = color

    def plainText(self) -> str:
        return formatRow(self.timer_key, self.remaining, self.timer_name)

    def render(self) -> RenderResult:
        # plain Text, not markup: names may contain brackets
        text = Text(self.plainText())
        if self.use_color and self.running:
            text.stylize(RUNNING_STYLE)
        return text
