from dataclasses import dataclass
from typing import Any, Optional

from lamprey.ldp.conneg import DEFAULT_CONTENT_TYPE
from lamprey.repo import Repository


@dataclass
class LampreyContext:
    """Application-wide objects built lazily from the configuration
    dictionary, which has the sections:

    ```yaml
    REPOSITORY:
      BASE_URI: http://localhost:5000/
    SERVER:
      DEFAULT_CONTENT_TYPE: text/turtle
    LOGGING:
      # optional logging.config.dictConfig() mapping
    ```
    """
    config: dict[str, Any] = None
    _repo: Optional[Repository] = None

    @property
    def repo(self) -> Repository:
        if self._repo is None:
            self._repo = Repository.from_config(self.config.get('REPOSITORY') or {})
        return self._repo

    @property
    def default_content_type(self) -> str:
        return (self.config.get('SERVER') or {}).get('DEFAULT_CONTENT_TYPE', DEFAULT_CONTENT_TYPE)
