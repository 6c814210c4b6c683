from dataclasses import dataclass, field
from typing import Optional, List

@dataclass
class StatusStore:
    last_error: Optional[str] = None
    logs: List[str] = field(default_factory=list)
    max_logs: int = 200

    def log(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > self.max_logs:
            self.logs = self.logs[-self.max_logs:]
