from __future__ import annotations

from dataclasses import dataclass

U64_LIMIT = 1 << 64


@dataclass(frozen=True, slots=True)
class PrimeRecord:
    # One discovered prime plus the next multiple of it that is not yet marked.
    p: int
    nextval: int

    def __post_init__(self) -> None:
        if not 2 <= self.p < U64_LIMIT:
            raise ValueError(f"PrimeRecord.p out of range: {self.p}")
        if not 0 <= self.nextval < U64_LIMIT:
            raise ValueError(f"PrimeRecord.nextval out of range: {self.nextval}")
        if self.nextval <= self.p or self.nextval % self.p != 0:
            raise ValueError(f"nextval {self.nextval} is not a multiple of {self.p} above it")

    @classmethod
    def discovered(cls, p: int) -> PrimeRecord:
        # Fresh primes start sieving at their first proper multiple.
        return cls(p=p, nextval=p + p)

    def advanced_to(self, nextval: int) -> PrimeRecord:
        return PrimeRecord(p=self.p, nextval=nextval)
