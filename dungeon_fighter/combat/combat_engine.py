"""
Combat engine module for Dungeon Fighter.

Resolves player actions. Every action plays out a whole round at once: the
player's half, then (unless the enemy fell) the enemy's half. The turn
marker moves PLAYER -> ENEMY -> PLAYER along the way purely so the display
can follow; it never blocks input.
"""

from catchery import log_warning

from dungeon_fighter.auth.results import AuthGateway, AuthResult
from dungeon_fighter.character.enemy import Enemy
from dungeon_fighter.character.player import Player
from dungeon_fighter.combat.damage import blocked_damage, roll_enemy_damage, roll_player_damage
from dungeon_fighter.core.constants import CombatAction, CueKind, TurnSide
from dungeon_fighter.core.dice import DiceRoller, RandomRoller
from dungeon_fighter.core.error_handling import PersistenceError
from dungeon_fighter.core.logging import get_logger
from dungeon_fighter.core.utils import coerce_int
from dungeon_fighter.session.game_session import GameSession
from dungeon_fighter.ui.presentation import AnimationCue, Presenter, RenderSnapshot, SafePresenter

logger = get_logger(__name__)


class CombatEngine:
    """Owns the player and the current enemy and resolves combat rounds.

    The engine talks to the outside world through three collaborators: the
    auth gateway (to save the level after a victory), the presenter (to
    redraw the battle) and the roller (for every damage roll).
    """

    def __init__(
        self,
        session: GameSession,
        player: Player | None = None,
        gateway: AuthGateway | None = None,
        presenter: Presenter | None = None,
        roller: DiceRoller | None = None,
    ):
        """Initialize the engine and spawn the enemy of the player's stage.

        Args:
            session (GameSession): The shared session state.
            player (Player | None): The player, a fresh one when omitted.
            gateway (AuthGateway | None): Where progress is saved. Without a
                gateway victories are only kept in memory.
            presenter (Presenter | None): The display, wrapped so that its
                failures are contained.
            roller (DiceRoller | None): Source of damage rolls, an unseeded
                RandomRoller when omitted.

        """
        self.session: GameSession = session
        self.player: Player = player if player is not None else Player()
        self.gateway: AuthGateway | None = gateway
        self.presenter: SafePresenter = SafePresenter(presenter)
        self.roller: DiceRoller = roller if roller is not None else RandomRoller()
        # The last progress save failure, cleared by the next victory.
        self.last_save_error: PersistenceError | None = None
        self.enemy: Enemy = self.spawn_enemy()
        self.sync(TurnSide.PLAYER)

    # ==========================================================================
    # STATE AND DISPLAY
    # ==========================================================================

    def spawn_enemy(self) -> Enemy:
        """Replaces the enemy with a fresh one for the player's stage.

        Returns:
            Enemy: The new enemy.

        """
        self.enemy = Enemy(stage=self.player.stage)
        logger.debug("Spawned %s with %d HP", self.enemy.name, self.enemy.max_hp)
        return self.enemy

    def snapshot(self) -> RenderSnapshot:
        """Builds the render snapshot of the current state."""
        return RenderSnapshot(
            player_hp_percent=self.player.hp_percent,
            enemy_hp_percent=self.enemy.hp_percent,
            player_level=self.player.level,
            enemy_name=self.enemy.name,
            turn=self.session.turn,
            status=self.session.status,
        )

    def sync(self, turn: TurnSide, status: str | None = None) -> None:
        """Moves the turn marker and pushes a snapshot.

        Args:
            turn (TurnSide): The turn to display.
            status (str | None): New status line, the previous one is kept
                when omitted.

        """
        self.session.turn = turn
        if status is not None:
            self.session.status = status
        self.presenter.render(self.snapshot())

    def set_status(self, message: str) -> None:
        """Replaces the status line and pushes a snapshot."""
        self.sync(self.session.turn, message)

    def animate(self, kind: CueKind, side: TurnSide) -> None:
        self.presenter.animate(AnimationCue(kind=kind, side=side))

    def load_progress(self, level: int, status: str | None = None) -> None:
        """Applies an account's saved level to the player.

        Level and stage are raised to the saved level but never lowered, the
        player is healed and a new enemy guards the resulting stage.

        Args:
            level (int): The level stored for the account.
            status (str | None): Status line to display afterwards.

        """
        stored = coerce_int(level)
        self.player.increase_level(stored)
        self.player.set_stage(max(self.player.stage, stored))
        self.player.heal_full()
        self.spawn_enemy()
        self.sync(TurnSide.PLAYER, status)

    # ==========================================================================
    # PLAYER ACTIONS
    # ==========================================================================

    async def process_combat(self, action: CombatAction | str | None) -> str:
        """Dispatches a combat action.

        Args:
            action (CombatAction | str | None): HIT or BLOCK.

        Returns:
            str: The narrative of the round.

        """
        if action in (CombatAction.HIT, CombatAction.HIT.value):
            return await self.perform_hit()
        if action in (CombatAction.BLOCK, CombatAction.BLOCK.value):
            return await self.perform_block()
        log_warning(
            f"Invalid combat action: {action}",
            {"action": action, "context": "process_combat"},
        )
        return "Invalid combat command."

    async def perform_hit(self) -> str:
        """Attacks the enemy, then lets it strike back if it survived.

        Returns:
            str: The narrative of the round.

        """
        self.sync(TurnSide.PLAYER)
        damage = roll_player_damage(self.roller, self.player.level)
        self.enemy.take_damage(damage)
        self.animate(CueKind.HIT, TurnSide.ENEMY)
        self.sync(TurnSide.ENEMY, f"You hit for {damage}.")

        # A beaten enemy does not get its half of the round.
        if not self.enemy.is_alive():
            return await self.handle_enemy_defeat()

        enemy_result = self.enemy_turn()
        self.sync(TurnSide.PLAYER)
        return f"You deal {damage}. {enemy_result}"

    async def perform_block(self) -> str:
        """Raises the guard, then lets the enemy strike.

        Returns:
            str: The narrative of the round.

        """
        self.sync(TurnSide.PLAYER)
        self.player.is_blocking = True
        self.animate(CueKind.BLOCK, TurnSide.PLAYER)
        self.sync(TurnSide.ENEMY, "You brace for the next hit.")

        enemy_result = self.enemy_turn()
        self.sync(TurnSide.PLAYER)
        return f"Block ready. {enemy_result}"

    # ==========================================================================
    # ROUND RESOLUTION
    # ==========================================================================

    def enemy_turn(self) -> str:
        """Resolves the enemy's attack on the player.

        A raised guard reduces the hit and is spent whatever happens. If the
        player drops to zero they are restored to full health on the spot.

        Returns:
            str: The narrative of the enemy's half of the round.

        """
        base = roll_enemy_damage(self.roller, self.player.stage)
        damage = blocked_damage(base) if self.player.is_blocking else base
        self.player.is_blocking = False
        self.player.take_damage(damage)

        if damage > 0:
            self.animate(CueKind.HIT, TurnSide.PLAYER)
        else:
            self.animate(CueKind.BLOCK, TurnSide.PLAYER)

        if not self.player.is_alive():
            self.player.heal_full()
            logger.info("%s was defeated at stage %d", self.player.name, self.player.stage)
            self.sync(TurnSide.PLAYER, "You were defeated. HP restored.")
            return f"Enemy deals {damage}. You were defeated and restored to full HP."

        self.set_status(f"Enemy dealt {damage}.")
        return f"Enemy deals {damage}."

    async def handle_enemy_defeat(self) -> str:
        """Advances to the next stage after a victory.

        The stage goes up by one and the level follows when the stage
        overtakes it. The new level is then saved for the logged-in account;
        a failed save is reported in the status line but the progress made
        in this session stands.

        Returns:
            str: The victory narrative.

        """
        self.player.set_stage(self.player.stage + 1)
        if self.player.stage > self.player.level:
            self.player.increase_level(self.player.level + 1)

        self.last_save_error = None
        await self.save_progress()

        self.spawn_enemy()
        if self.last_save_error is not None:
            self.sync(TurnSide.PLAYER, f"Progress save failed: {self.last_save_error.message}")
        else:
            self.sync(TurnSide.PLAYER, f"Enemy defeated. Stage {self.player.stage} begins.")
        return f"Enemy defeated. You advance to stage {self.player.stage}."

    async def save_progress(self) -> bool:
        """Saves the player level for the logged-in account.

        Returns:
            bool: True when the level was stored, False when nobody is logged
            in, no gateway is configured, or the save failed.

        """
        user = self.session.current_user
        if user is None or self.gateway is None:
            return False

        try:
            result = await self.gateway.update_level(user, self.player.level)
        except Exception as exc:
            # Gateways report failures as results; anything raised is a transport problem.
            result = AuthResult.transport_error(f"{exc.__class__.__name__}: {exc}")
        if result.ok:
            logger.debug("Saved level %d for %s", self.player.level, user)
            return True

        failure = result.reason()
        self.last_save_error = PersistenceError(failure, {"user": user, "level": self.player.level})
        log_warning(
            f"Progress save failed: {failure.message}",
            {**self.last_save_error.to_dict(), "context": "progress_save"},
        )
        return False
