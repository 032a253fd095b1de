# tactician/core.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from .config import DEFAULT_CONFIG, ContentPaths, DuelConfig, TacticalConfig
from .dice import Dice
from .loader import FighterSpec, load_catalog
from .models import CombatantSnapshot, LogEntry, Move, Phase
from .session import DuelResult, DuelSession
from .systems.ai.controller import Decision, DecisionState, TacticalController

EntrySink = Callable[[LogEntry], None]


@dataclass
class Tactician:
    """
    Tactician is the façade / public API for the package.

    Everything external (CLI, tests, a host game) should call into this instead of
    wiring controllers, dice and sessions together ad hoc.
    """

    config: TacticalConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    duel: DuelConfig = field(default_factory=DuelConfig)
    paths: ContentPaths = field(default_factory=ContentPaths)
    seed: Optional[int] = None

    dice: Dice = field(init=False)
    controllers: Dict[str, TacticalController] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        self.dice = Dice(seed=self.seed) if self.seed is not None else Dice()

    def new_controller(self) -> TacticalController:
        """A controller with its own reproducible random stream (one per agent)."""
        return TacticalController(config=self.config, dice=self.dice.spawn())

    def controller_for(self, agent: str) -> TacticalController:
        """The controller that decides for `agent`, created on first use."""
        if agent not in self.controllers:
            self.controllers[agent] = self.new_controller()
        return self.controllers[agent]

    # --- Content ----------------------------------------------------------

    def load_catalog(self, path: Optional[Path | str] = None) -> Dict[str, FighterSpec]:
        return load_catalog(path if path is not None else self.paths.abs(self.paths.catalog))

    # --- Decisions --------------------------------------------------------

    def decide(
        self,
        me: CombatantSnapshot,
        enemy: CombatantSnapshot,
        turn: int,
        log: Sequence[LogEntry],
        catalog: Sequence[Move],
        phase: Phase = Phase.NORMAL,
        previous_state: Optional[DecisionState] = None,
    ) -> Decision:
        """
        One decision for `me`. Each agent name gets its own controller, so one
        agent's random draws never shift another's.
        """
        return self.controller_for(me.name).decide(me, enemy, turn, log, catalog, phase, previous_state)

    # --- Duels ------------------------------------------------------------

    def run_duel(
        self,
        a: FighterSpec | CombatantSnapshot,
        b: FighterSpec | CombatantSnapshot,
        *,
        max_turns: Optional[int] = None,
        on_entry: Optional[EntrySink] = None,
    ) -> DuelResult:
        """
        Run an AI-vs-AI duel. FighterSpecs get a fresh snapshot with the configured
        starting chi; snapshots are used (and mutated) as given.
        """
        def prepare(f: FighterSpec | CombatantSnapshot) -> CombatantSnapshot:
            return f.snapshot(chi=self.duel.starting_chi) if isinstance(f, FighterSpec) else f

        session = DuelSession(dice=self.dice.spawn(), config=self.duel, tactical=self.config)
        return session.run(prepare(a), prepare(b), max_turns=max_turns, on_entry=on_entry)
