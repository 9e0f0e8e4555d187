from __future__ import annotations

import random
from typing import Iterable, Iterator, Optional, Tuple

SHELL_COMMANDS: Tuple[str, ...] = (
    "ls -l", "cd ..", "mkdir test", "rm -rf", "touch file.txt",
    "cat file.txt", "grep pattern", "chmod +x", "ssh user@host",
    "scp file user@host:", "tar -cvzf", "wget url", "curl -O url",
    "find . -name", "ps aux", "kill -9", "df -h", "du -sh",
    "top", "ifconfig", "ping google.com", "traceroute", "nslookup",
    "netstat -tuln", "iptables -L", "sed 's/old/new/'", "awk '{print $1}'",
    "cut -d: -f1", "sort file.txt", "uniq -c", "head -n 5", "tail -f",
)


class CommandPool:
    """Fixed, read-only set of strings a tile can carry."""

    def __init__(self, commands: Iterable[str] = SHELL_COMMANDS, rng: Optional[random.Random] = None) -> None:
        self._commands: Tuple[str, ...] = tuple(commands)
        if not self._commands:
            raise ValueError('Command pool must not be empty')
        self._rng = rng or random.Random()

    def pick(self) -> str:
        """Returns a uniformly random command."""
        return self._commands[self._rng.randrange(len(self._commands))]

    @property
    def commands(self) -> Tuple[str, ...]:
        return self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __contains__(self, command: object) -> bool:
        return command in self._commands
