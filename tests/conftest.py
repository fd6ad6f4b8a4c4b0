import numpy as np
import pytest
import segno


def make_grid(content, version, error, mask, mode=None):
    """Module matrix from an independent encoder; `mask` is the ISO reference number."""
    qr = segno.make(content, version=version, error=error, mask=mask, mode=mode,
                    micro=False, boost_error=False)
    return np.array([list(row) for row in qr.matrix], dtype=np.uint8)


def bits_to_codewords(bits, total):
    """Bit string -> `total` codewords, zero-filled then padded with 0xEC/0x11."""
    bits = bits + '0' * (-len(bits) % 8)
    codewords = [int(bits[i:i+8], 2) for i in range(0, len(bits), 8)]
    pad = [0xEC, 0x11]
    while len(codewords) < total:
        codewords.append(pad[len(codewords) % 2])
    return codewords


@pytest.fixture
def encode():
    return make_grid


@pytest.fixture
def to_codewords():
    return bits_to_codewords


@pytest.fixture
def hello_world(encode):
    # ISO mask 5 is mask index 0 in format-codeword numbering
    return encode('HELLO WORLD', 1, 'M', 5, mode='alphanumeric')
