"""Exercise domain entity: one item of the daily workout (display strings only)."""
from typing import Optional


class Exercise:
    def __init__(self, name: str = "", description: str = "", duration: str = "",
                 sets: Optional[str] = None, reps: Optional[str] = None):
        self.name = name
        self.description = description
        self.duration = duration
        self.sets = sets
        self.reps = reps

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.duration}"]
        if self.sets:
            parts.append(f"{self.sets} sets")
        if self.reps:
            parts.append(f"{self.reps} reps")
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Exercise):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates an Exercise from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        sets = d.get("sets")
        reps = d.get("reps")
        return Exercise(
            name=str(d.get("name", "")),
            description=str(d.get("description", "")),
            duration=str(d.get("duration", "")),
            sets=str(sets) if sets is not None else None,
            reps=str(reps) if reps is not None else None,
        )

    def to_dict(self):
        d = {
            "name": self.name,
            "description": self.description,
            "duration": self.duration,
        }
        # optional fields are omitted rather than stored as null
        if self.sets is not None:
            d["sets"] = self.sets
        if self.reps is not None:
            d["reps"] = self.reps
        return d
