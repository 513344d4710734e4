from typing import Dict, Optional, Union


class Frame:
    def __init__(
        self,
        command: str = "",
        headers: Optional[Dict[str, str]] = None,
        body: Union[str, bytes, None] = None,
    ):
        self.command = command
        if '\n' in self.command:
            raise RuntimeError(f"Invalid command {self.command}")
        self.headers: Dict[str, str] = dict(headers) if headers else {}
        self.body = body

    def __getitem__(self, key: str) -> str:
        return self.headers[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.headers[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.headers

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(key, default)

    def __repr__(self) -> str:
        headers = ''
        if self.headers:
            headers = ';'.join(f"{key}: {value}" for key, value in self.headers.items())
        return f'<Frame: {self.command} headers: {headers}>'
