"""Quote value type."""


class Quote:
    """A person's name paired with something they said.

    `name` doubles as the key of the stored document, so a quote cannot be
    renamed: writing a quote with a new name creates a new document.
    """

    def __init__(self, name: str, quote: str = ""):
        self.name = name
        self.quote = quote

    @classmethod
    def from_dict(cls, data: dict):
        quote = data.get("quote")
        return cls(name=data.get("name"), quote="" if quote is None else quote)

    @classmethod
    def from_row(cls, row):
        """Build a quote from a name_and_quote index row, a missing quote reads as empty"""
        return cls(name=str(row.key), quote="" if row.value is None else str(row.value))

    def to_dict(self) -> dict:
        """Document body stored under `name`"""
        return {
            "name": self.name,
            "quote": self.quote
        }

    def __eq__(self, other):
        if not isinstance(other, Quote):
            return NotImplemented
        return self.name == other.name and self.quote == other.quote

    def __hash__(self):
        return hash((self.name, self.quote))

    def __repr__(self):
        return f"Quote(name={self.name!r}, quote={self.quote!r})"
