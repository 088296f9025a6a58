from typing import Hashable, Iterable, List, Optional


class Lexicon:
    """
    Assigns dense integer ids to keys (terms or document ids) in order of
    first appearance.
    """

    def __init__(self, keys: Iterable[Hashable] = ()):
        self.next_id: int = 0
        self.key_to_id: dict = dict()
        self.keys: List[Hashable] = list()
        for key in keys:
            self.get_id(key)

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, key) -> bool:
        return key in self.key_to_id

    def get_id(self, key: Hashable) -> int:
        if key in self.key_to_id:
            return self.key_to_id[key]

        key_id = self.next_id
        self.key_to_id[key] = key_id
        self.next_id += 1

        self.keys.append(key)
        return key_id

    def lookup(self, key: Hashable) -> Optional[int]:
        # Does not assign
        return self.key_to_id.get(key)

    def get_key(self, key_id: int) -> Optional[Hashable]:
        if key_id < 0 or key_id >= len(self.keys):
            return None
        return self.keys[key_id]
