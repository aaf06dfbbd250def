import structlog

logger = structlog.get_logger()

DEFAULT_CAPACITY = 16
DEFAULT_LOAD_FACTOR = .75
HASH_MULTIPLIER = 31


class HashMapError(Exception):
    pass


# Raised when a Chain position outside its current size is addressed.
class OutOfBounds(HashMapError, IndexError):
    pass


# Raised by get when no entry matches the key. has, remove and find report absence by value instead.
class NotFound(HashMapError, KeyError):
    pass


class Entry(object):
    # A single key-value pair. The key is fixed at creation, the value is overwritten in place
    # when the same key is set again. O(1)
    def __init__(self, key, value):
        self._key = key
        self.value = value

    @property
    def key(self):
        return self._key

    def __repr__(self):
        return "Entry(" + repr(self._key) + ", " + repr(self.value) + ")"


class Chain(object):
    # Ordered list of the entries that hashed into one bucket. Insertion order is kept because
    # it is the order in which keys, values and entries are enumerated. O(1) to initialize.
    def __init__(self):
        self._entries = []

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __contains__(self, key):
        return self.contains(key)

    def __repr__(self):
        return "Chain(" + repr(self._entries) + ")"

    def size(self):
        return len(self._entries)

    # Adds an entry at the end in O(1). The caller must already know the key is not present.
    def append(self, entry):
        self._entries.append(entry)

    # Returns the position of the entry with the given key, or None. O(n) in the chain length,
    # which stays small while the table is under its load factor.
    def find(self, key):
        for i, entry in enumerate(self._entries):
            if entry.key == key:
                return i
        return None

    # Returns the entry at a position in O(1). Negative indices are not accepted.
    def at(self, index):
        if index < 0 or index >= len(self._entries):
            raise OutOfBounds("chain index " + str(index) + " out of range for size " + str(len(self._entries)))
        return self._entries[index]

    # Same scan as find, but a missing key is an error here.
    def get(self, key):
        index = self.find(key)
        if index is None:
            raise NotFound(key)
        return self._entries[index]

    def contains(self, key):
        return self.find(key) is not None

    # Deletes the entry at a position; later entries shift down by one. O(n)
    def remove_at(self, index):
        self.at(index)
        del self._entries[index]

    def keys_to_list(self):
        return [entry.key for entry in self._entries]

    def values_to_list(self):
        return [entry.value for entry in self._entries]

    def entries_to_list(self):
        return [(entry.key, entry.value) for entry in self._entries]


class HashTable(object):
    # Maps string keys to values using separate chaining. O(n) to initialize the bucket list.
    # Capacity and load factor can be chosen up front to avoid resizing for a known data set.
    def __init__(self, load_factor=DEFAULT_LOAD_FACTOR, capacity=DEFAULT_CAPACITY):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError("capacity must be a positive integer, got " + repr(capacity))
        if not 0 < load_factor <= 1:
            raise ValueError("load_factor must be in (0, 1], got " + repr(load_factor))
        self.load_factor = load_factor
        self.capacity = capacity
        self.original_capacity = capacity
        self.buckets = [None] * capacity

    # Allows len() to take the table. O(capacity) because the count is summed from the chains.
    def __len__(self):
        return self.length()

    # Subscript retrieval. Unlike get, an empty bucket is reported the same way as a missing key.
    def __getitem__(self, key):
        chain = self.buckets[self.hash(key)]
        if chain is None:
            raise NotFound(key)
        return chain.get(key).value

    def __setitem__(self, key, value):
        self.set(key, value)

    # del table[key] behaves like del on a dict and fails for a missing key.
    def __delitem__(self, key):
        if not self.remove(key):
            raise NotFound(key)

    # Iterates (key, value) pairs. O(1) to create, O(capacity + n) to exhaust.
    def __iter__(self):
        return HashTableIterator(self)

    def __contains__(self, key):
        return self.has(key)

    def __repr__(self):
        pairs = ", ".join(repr(key) + ": " + repr(value) for key, value in self)
        return "HashTable({" + pairs + "}, capacity=" + str(self.capacity) + ")"

    def key_iterator(self):
        return HashKeyIterator(self)

    def value_iterator(self):
        return HashValueIterator(self)

    # Polynomial rolling hash over the key's code points, reduced modulo the current capacity at
    # every step. Nothing is cached, so the result follows the capacity. O(k) in the key length.
    def hash(self, key):
        if not isinstance(key, str):
            raise TypeError("keys must be strings, not " + type(key).__name__)
        hash_code = 0
        for char in key:
            hash_code = (HASH_MULTIPLIER * hash_code + ord(char)) % self.capacity
        return hash_code

    # Adds a key-value pair or replaces the value of an existing key. Replacing returns before
    # the growth check. O(1) amortized: a new key that brings occupancy up to the load factor
    # triggers an O(n) rehash into twice as many buckets.
    def set(self, key, value):
        index = self.hash(key)
        chain = self.buckets[index]
        if chain is None:
            chain = Chain()
            self.buckets[index] = chain
        else:
            position = chain.find(key)
            if position is not None:
                chain.at(position).value = value
                return
        chain.append(Entry(key, value))
        if self.is_full():
            self.double()

    # Returns the stored value, None for an empty bucket, and raises NotFound when the bucket's
    # chain has no such key.
    def get(self, key):
        chain = self.buckets[self.hash(key)]
        if chain is None:
            return None
        return chain.get(key).value

    def has(self, key):
        chain = self.buckets[self.hash(key)]
        if chain is None:
            return False
        return chain.contains(key)

    # Removes the key and returns True, or returns False when there was nothing to remove.
    def remove(self, key):
        chain = self.buckets[self.hash(key)]
        if chain is None:
            return False
        position = chain.find(key)
        if position is None:
            return False
        chain.remove_at(position)
        return True

    # Removes a key and returns its value in one step, or returns default if it is absent.
    def pop(self, key, default=None):
        chain = self.buckets[self.hash(key)]
        if chain is None:
            return default
        position = chain.find(key)
        if position is None:
            return default
        value = chain.at(position).value
        chain.remove_at(position)
        return value

    # Discards every entry and goes back to the capacity the table was created with. O(capacity)
    def clear(self):
        discarded = self.length()
        self.capacity = self.original_capacity
        self.buckets = [None] * self.capacity
        logger.debug("hash_table_cleared", capacity=self.capacity, discarded=discarded)

    def length(self):
        total = 0
        for chain in self.buckets:
            if chain is not None:
                total += chain.size()
        return total

    def keys(self):
        result = []
        for chain in self.buckets:
            if chain is not None:
                result.extend(chain.keys_to_list())
        return result

    def values(self):
        result = []
        for chain in self.buckets:
            if chain is not None:
                result.extend(chain.values_to_list())
        return result

    def entries(self):
        result = []
        for chain in self.buckets:
            if chain is not None:
                result.extend(chain.entries_to_list())
        return result

    # True once occupancy reaches the load factor share of the current capacity.
    def is_full(self):
        return self.length() >= self.capacity * self.load_factor

    # Doubles the capacity and moves every entry to the bucket its hash selects under the new
    # modulus. The Entry objects themselves are reused. O(n + capacity)
    def double(self):
        old_buckets = self.buckets
        old_capacity = self.capacity
        self.capacity = old_capacity * 2
        self.buckets = [None] * self.capacity
        for chain in old_buckets:
            if chain is None:
                continue
            for entry in chain:
                index = self.hash(entry.key)
                if self.buckets[index] is None:
                    self.buckets[index] = Chain()
                self.buckets[index].append(entry)
        logger.debug("hash_table_resized", old_capacity=old_capacity, capacity=self.capacity, length=self.length())


class HashTableIterator(object):
    # O(1) to initialize dedicated iterator class
    def __init__(self, hash_table):
        self.outer = 0
        self.inner = 0
        self.ht = hash_table

    def __iter__(self):
        return self

    # The outer loop steps through the bucket list, skipping empty slots, while the inner loop
    # steps through the entries of the chain at that slot. Finding the next pair is O(1) when
    # the table is not sparse.
    def __next__(self):
        buckets = self.ht.buckets
        while self.outer < len(buckets):
            chain = buckets[self.outer]
            if chain is not None and self.inner < chain.size():
                entry = chain.at(self.inner)
                self.inner += 1
                return entry.key, entry.value
            self.outer += 1
            self.inner = 0
        raise StopIteration


class HashKeyIterator(object):
    # Key-only view over the HashTableIterator walk. O(1) to initialize.
    def __init__(self, hash_table):
        self.iterator = HashTableIterator(hash_table)

    def __iter__(self):
        return self

    def __next__(self):
        return next(self.iterator)[0]


class HashValueIterator(object):
    def __init__(self, hash_table):
        self.iterator = HashTableIterator(hash_table)

    def __iter__(self):
        return self

    def __next__(self):
        return next(self.iterator)[1]
