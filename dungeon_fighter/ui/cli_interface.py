"""
Terminal interface module for Dungeon Fighter.

Provides the rich based presenter drawing the battle panel and the
prompt_toolkit loop reading commands, echoing them and printing the
narrative returned by the session controller.
"""

from catchery import log_warning
from prompt_toolkit import ANSI, PromptSession
from prompt_toolkit.completion import WordCompleter
from rich.table import Table

from dungeon_fighter.core.constants import COMMAND_KEYWORDS, TurnSide
from dungeon_fighter.core.error_handling import FighterError
from dungeon_fighter.core.logging import get_logger
from dungeon_fighter.core.utils import ccapture, cprint, crule, make_bar
from dungeon_fighter.session.session_controller import SessionController
from dungeon_fighter.ui.presentation import AnimationCue, RenderSnapshot

logger = get_logger(__name__)

GREETING = "Dungeon Fighter terminal ready. Type HELP."


class RichPresenter:
    """
    Presenter drawing the battle with rich.

    The engine pushes several snapshots per round; only the latest one is
    kept and drawn when the terminal calls draw() after a command, together
    with the animation cues collected meanwhile.
    """

    def __init__(self, bar_length: int = 20) -> None:
        self.bar_length: int = bar_length
        self.snapshot: RenderSnapshot | None = None
        self.cues: list[AnimationCue] = []

    def render(self, snapshot: RenderSnapshot) -> None:
        self.snapshot = snapshot

    def animate(self, cue: AnimationCue) -> None:
        self.cues.append(cue)

    def build_table(self) -> Table | None:
        """
        Builds the battle panel from the latest snapshot.

        Returns:
            Table | None: The panel, None before the first snapshot.

        """
        if self.snapshot is None:
            return None
        snap = self.snapshot
        # Collect the cues per side.
        effects = {TurnSide.PLAYER: "", TurnSide.ENEMY: ""}
        for cue in self.cues:
            effects[cue.side] += cue.kind.emoji
        table = Table(title=f"TURN: {snap.turn.colorize(str(snap.turn))}", pad_edge=False)
        table.add_column("Side", style="bold")
        table.add_column("HP", justify="left")
        table.add_column("%", justify="right")
        table.add_column("", justify="left")
        table.add_row(
            f"LVL {snap.player_level}",
            make_bar(round(snap.player_hp_percent), 100, self.bar_length, "green"),
            f"{snap.player_hp_percent:.0f}",
            effects[TurnSide.PLAYER],
        )
        table.add_row(
            snap.enemy_name,
            make_bar(round(snap.enemy_hp_percent), 100, self.bar_length, "red"),
            f"{snap.enemy_hp_percent:.0f}",
            effects[TurnSide.ENEMY],
        )
        if snap.status:
            table.caption = snap.status
        return table

    def draw(self) -> None:
        """Prints the battle panel and forgets the shown cues."""
        table = self.build_table()
        self.cues.clear()
        if table is not None:
            cprint(table)


class TerminalApp:
    """
    Command loop of the terminal.

    Reads a line, echoes it, runs it through the session controller and
    prints the answer. Failures raised by the controller are printed as
    errors; the loop only stops on end of input or Ctrl-C.
    """

    def __init__(
        self,
        controller: SessionController,
        presenter: RichPresenter | None = None,
        prompt_session: PromptSession | None = None,
    ) -> None:
        self.controller: SessionController = controller
        self.presenter: RichPresenter | None = presenter
        self._prompt_session: PromptSession | None = prompt_session
        self.completer = WordCompleter(COMMAND_KEYWORDS, ignore_case=True)

    @property
    def prompt_session(self) -> PromptSession:
        # Created on first use; building it needs a terminal.
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        return self._prompt_session

    async def handle_line(self, line: str) -> list[str]:
        """
        Runs one line and returns what must be printed for it.

        Args:
            line (str): The raw line typed by the user.

        Returns:
            list[str]: The output lines, empty for blank input. Any error,
            expected or not, comes back as a single "ERROR: ..." line.

        """
        text = line.strip()
        if not text:
            return []
        output = [f"> {text}"]
        try:
            answer = await self.controller.execute(text)
        except FighterError as error:
            logger.debug("Command failed: %s", error.to_dict())
            output.append(f"ERROR: {error.message}")
            return output
        except Exception as exc:
            log_warning(
                f"Command crashed: {exc!s}",
                {"command": text.split()[0].upper(), "error_type": type(exc).__name__, "context": "handle_line"},
            )
            output.append(f"ERROR: {exc.__class__.__name__}: {exc}")
            return output
        if answer:
            output.extend(answer.split("\n"))
        return output

    async def run(self) -> None:
        """Runs the loop until end of input."""
        crule("Dungeon Fighter", style="bold green")
        cprint(GREETING, markup=False)
        if self.presenter is not None:
            self.presenter.draw()
        prompt = ccapture("[bold cyan]>[/] ")
        while True:
            try:
                line = await self.prompt_session.prompt_async(
                    ANSI(prompt),
                    completer=self.completer,
                    complete_while_typing=True,
                )
            except (EOFError, KeyboardInterrupt):
                break
            lines = await self.handle_line(line)
            for index, out in enumerate(lines):
                style = "bold red" if out.startswith("ERROR: ") else ("dim" if index == 0 else None)
                cprint(out, markup=False, style=style)
            if lines and self.presenter is not None:
                self.presenter.draw()
        crule("Farewell", style="bold red")
