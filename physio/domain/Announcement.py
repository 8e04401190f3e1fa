"""Content entities managed by admins: announcements and linked journal articles."""


class Announcement:
    def __init__(self, id: str, title: str = "", content: str = "", created_at: str = ""):
        self.id = id
        self.title = title
        self.content = content
        self.created_at = created_at

    def __str__(self) -> str:
        return f"{self.title} ({self.created_at})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Announcement(
            id=d.get("id", ""),
            title=d.get("title", ""),
            content=d.get("content", ""),
            created_at=d.get("createdAt", ""),
        )

    def to_dict(self):
        return {"id": self.id, "title": self.title, "content": self.content, "createdAt": self.created_at}


class Journal:
    def __init__(self, id: str, title: str = "", publisher: str = "", year: int = 0, link: str = ""):
        self.id = id
        self.title = title
        self.publisher = publisher
        self.year = year
        self.link = link

    def __str__(self) -> str:
        return f"{self.title} - {self.publisher}, {self.year}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Journal(
            id=d.get("id", ""),
            title=d.get("title", ""),
            publisher=d.get("publisher", ""),
            year=int(d.get("year", 0) or 0),
            link=d.get("link", ""),
        )

    def to_dict(self):
        return {"id": self.id, "title": self.title, "publisher": self.publisher,
                "year": self.year, "link": self.link}
