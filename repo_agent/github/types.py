from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class Repository(_Snapshot):
    """Repository metadata as returned by the REST API."""
    id: int
    name: str
    full_name: str
    description: Optional[str] = None
    private: bool
    html_url: str
    clone_url: str
    default_branch: str
    language: Optional[str] = None
    stargazers_count: int
    forks_count: int
    size: int
    created_at: datetime
    updated_at: datetime


class FileContent(_Snapshot):
    """A single file with its content decoded to text."""
    name: str
    path: str
    content: str
    encoding: str
    size: int
    sha: str


class DirectoryEntry(_Snapshot):
    """One entry of a directory listing."""
    name: str
    path: str
    type: Literal["file", "dir", "symlink", "submodule"]
    size: Optional[int] = None
    sha: str
    url: str
    html_url: Optional[str] = None
    download_url: Optional[str] = None


class ContentItem(BaseModel):
    """Raw entry from the contents endpoint (file, dir, symlink or submodule)."""
    name: str
    path: str
    type: Literal["file", "dir", "symlink", "submodule"]
    size: Optional[int] = None
    sha: str
    url: str
    html_url: Optional[str] = None
    download_url: Optional[str] = None
    content: Optional[str] = None
    encoding: Optional[str] = None


class SingleContent(BaseModel):
    kind: Literal["single"] = "single"
    item: ContentItem


class ContentListing(BaseModel):
    kind: Literal["listing"] = "listing"
    items: List[ContentItem]


ContentsResponse = Annotated[Union[SingleContent, ContentListing], Field(discriminator="kind")]


class CodeSearchRepository(_Snapshot):
    id: int
    name: str
    full_name: str
    html_url: str


class CodeSearchResult(_Snapshot):
    """A code search hit."""
    name: str
    path: str
    sha: str
    url: str
    html_url: str
    repository: CodeSearchRepository
    score: float


class CommitPerson(_Snapshot):
    name: str = ""
    email: str = ""
    date: str = ""


class Commit(_Snapshot):
    sha: str
    message: str
    author: CommitPerson
    committer: CommitPerson
    url: str
    html_url: str


ArchiveFormat = Literal["zipball", "tarball"]


class RepositoryArchive(_Snapshot):
    """A short-lived download location for a repository snapshot."""
    download_url: str
    filename: str
    ref: str
    format: ArchiveFormat


class SearchOptions(BaseModel):
    per_page: int = 30
    page: int = 1
    sort: Optional[Literal["updated", "stars", "forks"]] = None
    order: Optional[Literal["asc", "desc"]] = None


class HistoryOptions(BaseModel):
    per_page: int = 30
    page: int = 1
