"""
Static campus reference data.

Campuses are not stored; each one is a fixed list of dining venues where
rewards can be redeemed. Every venue offers both reward types.
"""
from types import MappingProxyType
from typing import List, Optional

from bugsnacks.models.enums import RewardType
from bugsnacks.models.records import Campus, Reward

NORTHWESTERN_DINING = (
    "Café Bergson",
    "Dining Commons",
    "Norris Center",
    "Retail Dining",
    "Chicago Campus",
    "Protein Bar",
    "847 Burger",
    "Buen Dia",
    "Shake Smart",
    "Chicken & Boba",
    "Allison Dining Commons",
    "Sargent Dining Commons",
    "847 Late Night at Fran's",
    "Wildcat Deli",
    "Tech Express",
    "Backlot at Kresge Cafe",
    "Starbucks",
    "Foster Walker Plex East",
    "Foster Walker Plex West & Market",
    "MOD Pizza",
    "Cafe Coralie",
    "Market at Norris",
    "Elder Dining Commons",
    "Lisa's Cafe",
)

# campus id -> (display name, dining venues)
_CAMPUSES = MappingProxyType({
    "northwestern1": ("Northwestern University", NORTHWESTERN_DINING),
})


def campus_ids() -> List[str]:
    return list(_CAMPUSES)


def dining_options(campus_id: str) -> Optional[List[str]]:
    entry = _CAMPUSES.get(campus_id)
    return list(entry[1]) if entry else None


def rewards_for(campus_id: str, venues: List[str]) -> List[Reward]:
    """Two rewards per venue, one of each type, in venue order"""
    rewards = []
    for venue in venues:
        for reward_type in (RewardType.GUEST_SWIPE, RewardType.MEAL_EXCHANGE):
            rewards.append(Reward(name=f"{venue} at {campus_id}", location=venue, type=reward_type))
    return rewards


def get_campus(campus_id: str) -> Optional[Campus]:
    entry = _CAMPUSES.get(campus_id)
    if entry is None:
        return None
    name, venues = entry
    return Campus(
        campus_id=campus_id,
        name=name,
        reward_locations=rewards_for(campus_id, list(venues)),
    )
