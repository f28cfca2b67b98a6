#
# GF(256) arithmetic and polynomial helpers for Reed-Solomon coding.
#

import threading

class galois_field_256(object):
    """
    Exponent and log tables for GF(2^8) with the primitive polynomial
    x^8 + x^4 + x^3 + x^2 + 1 (0x11d) and generator a = 2.

    The tables are shared by every instance. They are built on first use
    and never written to afterwards, so concurrent readers need no locking.

    For more information see:
    https://en.wikipedia.org/wiki/Finite_field
    https://www.thonky.com/qr-code-tutorial/error-correction-coding
    """

    PRIMITIVE = 0x11d

    ex_to_gf = None
    gf_to_ex = None

    lock_ = threading.Lock()

    @staticmethod
    def build_tables_():
        ex_to_gf = bytearray(512)
        gf_to_ex = bytearray(256)
        gf = 1

        for n in range(255):
            ex_to_gf[n] = gf
            gf_to_ex[gf] = n
            gf = gf << 1

            if (gf & 0x100):
                gf = gf ^ galois_field_256.PRIMITIVE

        # doubled so that mul() never needs a modulo
        for n in range(255,512):
            ex_to_gf[n] = ex_to_gf[n-255]

        return bytes(ex_to_gf),bytes(gf_to_ex)

    def __init__(self):
        cls = galois_field_256

        if (cls.ex_to_gf is None):
            with cls.lock_:
                if (cls.ex_to_gf is None):
                    exp,log = cls.build_tables_()
                    cls.gf_to_ex = log
                    cls.ex_to_gf = exp

    #
    def mul(self, a : int, b : int) -> int:
        if (a == 0 or b == 0):
            return 0

        return self.ex_to_gf[self.gf_to_ex[a] + self.gf_to_ex[b]]

    #
    def e2g(self, n : int) -> int:
        return self.ex_to_gf[n]

    #
    def g2e(self, a : int) -> int:
        return self.gf_to_ex[a]


class polynomial(galois_field_256):
    """
    Polynomials are lists of coefficients in GF(256), highest degree first.
    """
    def __init__(self):
        super().__init__()

    #
    def polymul(self, p, q) -> list:
        r = [0] * (len(p) + len(q) - 1)

        for i in range(len(p)):
            for j in range(len(q)):
                r[i+j] ^= self.mul(p[i],q[j])

        return r

    #
    # Remainder of data divided by gen. The caller appends len(gen)-1 zeroes
    # to the message before calling, so the result is the ECC block.
    #
    def polymod(self, data, gen) -> list:
        out = list(data)
        genlen = len(gen)

        for i in range(len(data) - genlen + 1):
            coef = out[i]

            # The leading coefficient becomes zero in any case
            if (coef == 0):
                continue

            for j in range(genlen):
                out[i+j] ^= self.mul(gen[j],coef)

        return out[len(data) - genlen + 1:]


class generator(object):
    """
    The generator polynomial is created by multiplying
    together (x - a**0) through (x - a**(n-1)), where
    n is the number of error codewords to be generated
    and a = 2

    For more information see:
    https://www.thonky.com/qr-code-tutorial/how-create-generator-polynomial
    """

    cache_ = {}

    @staticmethod
    def get_by_ecc_codewords(ecw : int) -> tuple:
        if (ecw < 1):
            raise ValueError(f"Unsupported generator size {ecw}")

        gen = generator.cache_.get(ecw)

        if (gen is None):
            poly = polynomial()
            g = [1]

            for i in range(ecw):
                g = poly.polymul(g,[1,poly.e2g(i)])

            # same result whoever gets here first
            gen = tuple(g)
            generator.cache_[ecw] = gen

        return gen
