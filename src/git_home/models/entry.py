"""History entry model for the git-home store."""

from datetime import datetime

from pydantic import BaseModel


class LogEntry(BaseModel):
    """The commit HEAD points at, as shown by `git home log`."""

    id: str
    author_name: str
    author_email: str
    timestamp: datetime
    message: str

    @property
    def author(self) -> str:
        return f"{self.author_name} <{self.author_email}>"

    @property
    def short_id(self) -> str:
        return self.id[:7]

    @property
    def subject(self) -> str:
        lines = self.message.strip().splitlines()
        return lines[0] if lines else ""
