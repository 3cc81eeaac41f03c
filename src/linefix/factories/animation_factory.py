from esper import World
from linefix.components.animation_shift import ShiftAnimation
from linefix.components.animation_merge import MergeAnimation
from linefix.components.animation_spawn import SpawnAnimation
from linefix.components.floating_score import FloatingScore
from linefix.components.duration import Duration
from linefix.constants import SHIFT_DURATION, MERGE_DURATION, SPAWN_DURATION, FLOAT_SCORE_DURATION
from linefix.systems.chain_merge import MergeEvent
from linefix.systems.line_shift import ShiftMove
from typing import Tuple, List

class AnimationFactory:
    def __init__(self, world: World):
        self.world = world

    def create_shift_group(self, moves: List[ShiftMove], duration: float = SHIFT_DURATION) -> List[int]:
        ents = []
        for move in moves:
            ent = self.world.create_entity()
            self.world.add_component(ent, ShiftAnimation(src=move.source, dst=move.target, rank=move.rank))
            self.world.add_component(ent, Duration(duration))
            ents.append(ent)
        return ents

    def create_merge_group(self, events: List[MergeEvent], start_delay: float = 0.0, duration: float = MERGE_DURATION) -> List[int]:
        ents = []
        for event in events:
            delay = start_delay + (event.chain - 1) * duration
            ent = self.world.create_entity()
            self.world.add_component(ent, MergeAnimation(src=event.source, dst=event.target, rank=event.rank, chain=event.chain, delay=delay))
            self.world.add_component(ent, Duration(duration))
            ents.append(ent)
        return ents

    def create_spawn(self, pos: Tuple[int,int], rank: int, delay: float = 0.0, duration: float = SPAWN_DURATION) -> int:
        ent = self.world.create_entity()
        self.world.add_component(ent, SpawnAnimation(pos=pos, rank=rank, delay=delay))
        self.world.add_component(ent, Duration(duration))
        return ent

    def create_floating_scores(self, scores: List[Tuple[Tuple[int,int], int]], duration: float = FLOAT_SCORE_DURATION) -> List[int]:
        ents = []
        for pos, amount in scores:
            ent = self.world.create_entity()
            self.world.add_component(ent, FloatingScore(pos=pos, amount=amount))
            self.world.add_component(ent, Duration(duration))
            ents.append(ent)
        return ents
