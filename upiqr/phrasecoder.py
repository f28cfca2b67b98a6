#
# Handle encoding of phrases into data codewords.
#

import logging

logger = logging.getLogger(__name__)

class encode(object):
    """
    This class implements byte mode encoding of arbitrary phrases.
    The result is the padded data codeword sequence of one QR-code
    version, ready for error correction coding.
    """

    # Modes..
    QR_MODE_BYTE = 0b0100

    # Width of the character count indicator. Kept at 8 bits for every
    # supported version, including 10 where ISO/IEC 18004 uses 16.
    QR_COUNT_BITS = 8

    # Pad codewords alternate between these two
    QR_PAD_FIRST = 0b11101100
    QR_PAD_TOGGLE = 0b11111101

    #
    def __init__(self,**kwargs):
        """
        **kwargs:
        ---------
        max_len : int
            Number of data codewords available in the selected version.
        """
        self.max_len = 0

        if ("max_len" in kwargs):
            self.max_len = kwargs["max_len"]

        if (self.max_len < 2):
            raise ValueError(f"Invalid data codeword capacity {self.max_len}")

    #
    @staticmethod
    def to_bytes(phrase) -> bytes:
        if (isinstance(phrase,str)):
            return phrase.encode("UTF-8")

        if (isinstance(phrase,(bytes,bytearray,memoryview))):
            return bytes(phrase)

        raise TypeError(f"Input phrase must be str or bytes got '{type(phrase)}'")

    #
    def encode_with_trailer_(self, bin_str : str) -> bytearray:
        """Internal method for adding trailing zeros and padding.

            Parameters:
            -----------
            bin_str : str
                Input phrase as a binary string.

            Return:
            -------
                bytearray containing the encoded phrase.
        """
        max_bits = self.max_len * 8

        # terminating zeroes
        if (len(bin_str)+4 <= max_bits):
            bin_str = bin_str + "0000"
        else:
            keep = max_bits - len(bin_str)
            bin_str = bin_str + "0000"[0:keep]
            logger.debug("terminator truncated to %d bits",keep)

        # align to 8 bits
        bin_str = bin_str + "00000000"[0:-len(bin_str) % 8]
        # convert to bytearray
        encoded = bytearray([int(bin_str[i:i+8],2) for i in range(0,len(bin_str),8)])

        pad = encode.QR_PAD_FIRST
        pos = len(encoded)

        while (pos < self.max_len):
            encoded.append(pad)
            pad = pad ^ encode.QR_PAD_TOGGLE
            pos += 1

        return encoded

    #
    def encode_preamble_(self, length : int) -> str:
        """Internal method for creating the preamble with the mode and phrase length.

            Return:
            -------
                str containing the encoded mode and length in binary format.
        """
        return f"{encode.QR_MODE_BYTE:04b}{length:0{encode.QR_COUNT_BITS}b}"

    #
    def encode_phrase(self, phrase) -> bytearray:
        """Encode a phrase in byte mode.

            Parameters:
            -----------
            phrase : str or bytes
                Input phrase to be encoded. A str is encoded as UTF-8.

            Raises:
            -------
            ValueError
                If the phrase does not fit into max_len codewords.

            Return:
            -------
                bytearray of exactly max_len codewords with preamble,
                payload, terminator and padding.
        """
        tmp = encode.to_bytes(phrase)

        if (len(tmp) > self.max_len - 2):
            raise ValueError("Phrase to be encoded is too long for QR-code version")

        # Mode and phrase length
        bin_str = self.encode_preamble_(len(tmp))
        bin_str = bin_str + "".join(f"{b:08b}" for b in tmp)

        return self.encode_with_trailer_(bin_str)
