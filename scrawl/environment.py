from typing import Any, Dict, List
from scrawl.errors import VariableNotDefinedError


class Environment:
    """Stack of variable frames.

    Index 0 holds the global frame, which lives as long as the
    environment. Every executing block pushes a frame on entry and pops it
    on exit, so `depth` is always one more than the block nesting level.
    """
    def __init__(self):
        self.frames: List[Dict[str, Any]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def globals(self) -> Dict[str, Any]:
        return self.frames[0]

    def push(self):
        self.frames.append({})

    def pop(self):
        if len(self.frames) == 1:
            raise IndexError('cannot pop the global frame')
        self.frames.pop()

    def get(self, name: str) -> Any:
        for frame in reversed(self.frames):
            if name in frame:
                return frame[name]
        raise VariableNotDefinedError(name)

    def set(self, name: str, value: Any) -> int:
        """Bind `name` and return the index of the frame written.

        An existing binding is overwritten where it lives, however far out.
        A name bound nowhere is created in the global frame, not the
        innermost one.
        """
        for index in range(len(self.frames) - 1, -1, -1):
            if name in self.frames[index]:
                self.frames[index][name] = value
                return index
        self.frames[0][name] = value
        return 0
