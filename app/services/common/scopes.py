"""Cache invalidation scopes.

Kind scopes ("votes", "regions", ...) tag list-style results that read a whole
table. Entity scopes ("election:7") tag results about one entity. A mutation
invalidates the kind scope of every table it changes plus the entity scopes
of every entity it touches.
"""

from app.models.registry import Voter
from app.models.voting import Vote

VOTES = "votes"
VOTERS = "voters"
CANDIDATES = "candidates"
ELECTIONS = "elections"
POLLING_STATIONS = "polling_stations"
REGIONS = "regions"
DISTRICTS = "districts"

KIND_SCOPES = {
    "vote": VOTES,
    "voter": VOTERS,
    "candidate": CANDIDATES,
    "election": ELECTIONS,
    "polling_station": POLLING_STATIONS,
    "region": REGIONS,
    "district": DISTRICTS,
}


def entity(kind: str, entity_id: int) -> str:
    """Scope of one entity, e.g. ``election:7``."""
    return f"{kind}:{entity_id}"


def for_entity(kind: str, entity_id: int) -> set[str]:
    """Scopes affected by creating, changing or deleting one entity."""
    return {KIND_SCOPES[kind], entity(kind, entity_id)}


def for_voter(voter: Voter) -> set[str]:
    """Voter scopes plus the units whose turnout depends on the voter."""
    scopes = for_entity("voter", voter.id)
    if voter.region_id is not None:
        scopes.add(entity("region", voter.region_id))
    if voter.district_id is not None:
        scopes.add(entity("district", voter.district_id))
    return scopes


def for_vote(vote: Vote, voter: Voter | None = None) -> set[str]:
    """Everything a ledger mutation can change: the vote and all it references."""
    scopes = {
        VOTES,
        entity("vote", vote.id),
        entity("voter", vote.voter_id),
        entity("candidate", vote.candidate_id),
        entity("election", vote.election_id),
        entity("polling_station", vote.polling_station_id),
    }
    if voter is not None:
        if voter.region_id is not None:
            scopes.add(entity("region", voter.region_id))
        if voter.district_id is not None:
            scopes.add(entity("district", voter.district_id))
    return scopes
