"""Quote domain entity: the motivational quote of the day."""


class Quote:
    def __init__(self, text: str = "", author: str = ""):
        self.text = text
        self.author = author

    def __str__(self) -> str:
        return f'"{self.text}" - {self.author}'

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Quote):
            return NotImplemented
        return self.text == other.text and self.author == other.author

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Quote(str(d.get("text", "")), str(d.get("author", "")))

    def to_dict(self):
        return {"text": self.text, "author": self.author}
