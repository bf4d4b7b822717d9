from nftregistry.exceptions import IndexMismatch


class OwnedIndex:
    """
    Per owner list of held token ids.

    Positions are dense: an owner with n tokens has them at positions 0..n-1. Removing a token
    moves the last one into the freed slot, so removal never leaves a gap and the listing
    always matches current ownership.
    """
    def __init__(self, state):
        self.state = state

    def count(self, account):
        return self.state.owned_count[account]

    def add(self, account, token_id):
        position = self.state.owned_count[account]

        self.state.owned_index[account, position] = token_id
        self.state.owned_position[token_id] = position
        self.state.owned_count[account] = position + 1

    def remove(self, account, token_id):
        position = self.state.owned_position[token_id]
        last = self.state.owned_count[account] - 1

        if position is None or last < 0 or self.state.owned_index[account, position] != token_id:
            raise IndexMismatch(token_id=token_id, account=account)

        if position != last:
            last_id = self.state.owned_index[account, last]
            self.state.owned_index[account, position] = last_id
            self.state.owned_position[last_id] = position

        del self.state.owned_index[account, last]
        del self.state.owned_position[token_id]
        self.state.owned_count[account] = last

    def ids(self, account):
        for position in range(self.state.owned_count[account]):
            yield self.state.owned_index[account, position]
