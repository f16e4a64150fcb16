"""MD2 message digest (RFC 1319, reference/teaching implementation).

This module provides a small, readable implementation of MD2. The engine is
stateful: message bytes are staged into 16-byte blocks, each full block
updates a running checksum and is mixed into a 48-byte state array. On
finalize the message is padded, the checksum itself is compressed as one last
block, and the first 16 bytes of the state are the digest. The engine then
resets itself so it can be reused for an unrelated message.

MD2 is broken and must not be used for anything security sensitive.
"""


def print_block(block):
    """Print each byte of block as an 8-character bitstring (MSB first)."""
    print(" ".join(format(b, "08b") for b in block))


class MD2:

    # Pi-derived byte permutation (RFC 1319, section 3.2)
    S_table = (
        41, 46, 67, 201, 162, 216, 124, 1, 61, 54, 84, 161, 236, 240, 6, 19,
        98, 167, 5, 243, 192, 199, 115, 140, 152, 147, 43, 217, 188, 76, 130, 202,
        30, 155, 87, 60, 253, 212, 224, 22, 103, 66, 111, 24, 138, 23, 229, 18,
        190, 78, 196, 214, 218, 158, 222, 73, 160, 251, 245, 142, 187, 47, 238, 122,
        169, 104, 121, 145, 21, 178, 7, 63, 148, 194, 16, 137, 11, 34, 95, 33,
        128, 127, 93, 154, 90, 144, 50, 39, 53, 62, 204, 231, 191, 247, 151, 3,
        255, 25, 48, 179, 72, 165, 181, 209, 215, 94, 146, 42, 172, 86, 170, 198,
        79, 184, 56, 210, 150, 164, 125, 182, 118, 252, 107, 226, 156, 116, 4, 241,
        69, 157, 112, 89, 100, 113, 135, 32, 134, 91, 207, 101, 230, 45, 168, 2,
        27, 96, 37, 173, 174, 176, 185, 246, 28, 70, 97, 105, 52, 64, 126, 15,
        85, 71, 163, 35, 221, 81, 175, 58, 195, 92, 249, 206, 186, 197, 234, 38,
        44, 83, 13, 110, 133, 40, 132, 9, 211, 223, 205, 244, 65, 129, 77, 82,
        106, 220, 55, 200, 108, 193, 171, 250, 36, 225, 123, 8, 12, 189, 177, 74,
        120, 136, 149, 139, 227, 99, 232, 109, 233, 203, 213, 254, 59, 0, 29, 57,
        242, 239, 183, 14, 102, 88, 208, 228, 166, 119, 114, 248, 235, 117, 75, 10,
        49, 68, 80, 180, 143, 237, 31, 26, 219, 153, 141, 51, 159, 17, 131, 20,
    )

    BLOCK_SIZE = 16
    DIGEST_SIZE = 16
    NUM_ROUNDS = 18

    def __init__(self, data=None, num_rounds=NUM_ROUNDS):
        """Initialize an empty engine, optionally absorbing data right away.

        num_rounds selects how many mixing rounds each compression runs
        (1-18); full MD2 uses 18.
        """
        assert num_rounds in range(1, MD2.NUM_ROUNDS + 1)
        self.num_rounds = num_rounds
        self.state = bytearray(48)
        self.block = bytearray(MD2.BLOCK_SIZE)
        self.checksum = bytearray(MD2.BLOCK_SIZE)
        self.block_fill = 0
        if data is not None:
            self.absorb(data)

    @staticmethod
    def S(x):
        """Return the substitution table entry for byte x."""
        return MD2.S_table[x & 0xff]

    @staticmethod
    def as_bytes(data):
        """Validate data and return it as an immutable bytes object.

        Raises TypeError for None, str and int (bytes(n) would silently
        produce n zero bytes) and ValueError for ints outside 0..255.
        """
        if data is None:
            raise TypeError("data must be a bytes-like object, not None")
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        if isinstance(data, (str, int)):
            raise TypeError(
                "data must be a bytes-like object, not %s" % type(data).__name__)
        return bytes(data)

    @staticmethod
    def md2_checksum(checksum, block):
        """Fold one 16-byte block into the running checksum in place.

        Each checksum byte is chained from the previously updated one,
        starting from the last byte left by the previous block.
        """
        assert len(checksum) == 16 and len(block) == 16
        last = checksum[15]
        for i in range(16):
            checksum[i] ^= MD2.S((block[i] ^ last) & 0xff)
            last = checksum[i]

    @staticmethod
    def md2_compress(state, block, num_rounds=NUM_ROUNDS):
        """Mix one 16-byte block into the 48-byte state in place.

        The state is split into three 16-byte regions A | B | C. B receives the
        block and C receives block XOR A. Then every state byte is XORed with
        S[t], where t is the previously updated byte, for num_rounds passes;
        after pass j, t is advanced by j (mod 256). Region A holds the new
        intermediate digest.
        """
        assert len(state) == 48 and len(block) == 16
        for i in range(16):
            state[16 + i] = block[i]
            state[32 + i] = block[i] ^ state[i]

        t = 0
        for j in range(num_rounds):
            for k in range(48):
                state[k] ^= MD2.S_table[t]
                t = state[k]
            t = (t + j) % 256

    def _process_block(self):
        MD2.md2_checksum(self.checksum, self.block)
        MD2.md2_compress(self.state, self.block, self.num_rounds)
        self.block_fill = 0

    def absorb(self, data):
        """Feed data into the engine; full blocks are processed immediately."""
        data = MD2.as_bytes(data)
        offset = 0
        while offset < len(data):
            take = min(MD2.BLOCK_SIZE - self.block_fill, len(data) - offset)
            self.block[self.block_fill:self.block_fill + take] = data[offset:offset + take]
            self.block_fill += take
            offset += take
            if self.block_fill == MD2.BLOCK_SIZE:
                self._process_block()

    def finalize(self):
        """Pad, process the checksum block and return the 16-byte digest.

        The engine is reset afterwards. A message whose length is a multiple
        of 16 still gets a full block of padding (sixteen 0x10 bytes).
        """
        pad = MD2.BLOCK_SIZE - self.block_fill
        for i in range(self.block_fill, MD2.BLOCK_SIZE):
            self.block[i] = pad
        self._process_block()
        MD2.md2_compress(self.state, self.checksum, self.num_rounds)

        digest = bytes(self.state[:MD2.DIGEST_SIZE])
        self.reset()
        return digest

    def digest(self, data):
        """Absorb data and finalize in one call."""
        self.absorb(data)
        return self.finalize()

    def reset(self):
        """Zero all buffers, returning the engine to its initial state."""
        self.state[:] = bytes(48)
        self.block[:] = bytes(MD2.BLOCK_SIZE)
        self.checksum[:] = bytes(MD2.BLOCK_SIZE)
        self.block_fill = 0

    def copy(self):
        """Return an independent engine with the same in-progress state."""
        other = MD2(num_rounds=self.num_rounds)
        other.state[:] = self.state
        other.block[:] = self.block
        other.checksum[:] = self.checksum
        other.block_fill = self.block_fill
        return other
