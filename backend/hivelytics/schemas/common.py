from __future__ import annotations

from enum import Enum


class OperationKind(str, Enum):
    vote = 'vote'
    author_reward = 'author_reward'
    curation_reward = 'curation_reward'
    benefactor_reward = 'benefactor_reward'
    witness_reward = 'witness_reward'


class RewardClass(str, Enum):
    active = 'active'
    passive = 'passive'
