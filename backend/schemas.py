from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field, StrictInt, StrictStr, TypeAdapter

T = TypeVar("T")

# 1. Upstream response shapes. Unknown fields are ignored, known ones are strictly typed.

class RiotAccount(BaseModel):
    puuid: StrictStr
    gameName: StrictStr
    tagLine: StrictStr

class RiotErrorStatus(BaseModel):
    status_code: StrictInt
    message: StrictStr

class RiotError(BaseModel):
    status: RiotErrorStatus

class MatchParticipant(BaseModel):
    puuid: StrictStr
    championName: StrictStr
    placement: StrictInt

class MatchMetadata(BaseModel):
    matchId: StrictStr

class MatchInfoBody(BaseModel):
    participants: list[MatchParticipant]

class MatchInfo(BaseModel):
    metadata: Optional[MatchMetadata] = None
    info: MatchInfoBody

MatchIds = TypeAdapter(list[StrictStr])

# 2. Normalized values handed to callers and stored in the cache

class MatchSummary(BaseModel):
    matchId: StrictStr
    participants: list[MatchParticipant]

class PlayerMatchResult(BaseModel):
    champion: str
    placement: int

# 3. Persisted records

class RiotId(BaseModel):
    gameName: str
    tagLine: str
    puuid: Optional[str] = None

class MatchResult(BaseModel):
    matchId: str
    champion: str
    placement: int

class ArenaProgress(BaseModel):
    firstPlaceChampions: list[str] = Field(default_factory=list)

# 4. Outcome of a lookup: exactly one of data / error is meaningful

class Result(BaseModel, Generic[T]):
    data: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
