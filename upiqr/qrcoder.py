#
# Build QR-Code symbols in byte mode with error correction level M,
# versions 1 to 10. Every encode object owns its own matrices, only the
# Galois field tables are shared.

import logging
import sys
import numpy as np
from . import phrasecoder
from . import galois
from . import qrpenalty

logger = logging.getLogger(__name__)


class CapacityExceeded(ValueError):
    """Raised when no supported version can hold the phrase."""

    def __init__(self, length : int, capacity : int):
        super().__init__(f"Phrase of {length} bytes does not fit into a QR-code, maximum is {capacity} bytes")
        self.length = length
        self.capacity = capacity


class encode(object):
    #
    QR_LIGHT = 0        # light module
    QR_DARK = 1         # dark module
    QR_UNSET = 2        # module not decided yet, only during construction

    #
    QR_MAX_VERSION = 10

    # Internal class for grouping QR-code encoding information.
    class eccInfo(object):
        def __init__(self, ver, tc, ec, g1b, g1dc, g2b, g2dc):
            self.version = ver
            self.total_codewords = tc
            self.ecc_codewords = ec
            self.group1blocks = g1b
            self.group1data_codewords = g1dc
            self.group2blocks = g2b
            self.group2data_codewords = g2dc
            self.data_codewords = g1b*g1dc + g2b*g2dc

        def get_num_row(self):
            return self.group1blocks+self.group2blocks

        def get_max_col(self):
            return max(self.group1data_codewords,self.group2data_codewords)

        def get_capacity(self):
            # mode and length indicators take two codewords
            return self.data_codewords - 2

    # finder pattern
    finder_ =   np.array(
                [1,1,1,1,1,1,1,
                 1,0,0,0,0,0,1,
                 1,0,1,1,1,0,1,
                 1,0,1,1,1,0,1,
                 1,0,1,1,1,0,1,
                 1,0,0,0,0,0,1,
                 1,1,1,1,1,1,1],np.uint8).reshape(7,7)

    # alignment pattern
    alignment_ =np.array(
                [1,1,1,1,1,
                 1,0,0,0,1,
                 1,0,1,0,1,
                 1,0,0,0,1,
                 1,1,1,1,1],np.uint8).reshape(5,5)

    # Starting from version 2
    alignment_loc_ = (
            (6, 18),  #2
            (6, 22),
            (6, 26),
            (6, 30),
            (6, 34),
            (6, 22, 38),  #7
            (6, 24, 42),
            (6, 26, 46),
            (6, 28, 50))  #10

    # version, total codewords, ecc codewords per block,
    # grp1 # blks, grp1 # data codewords, grp2 # blks, grp2 # data codewords
    ecc_table_ = (
        eccInfo(1,26,10,1,16,0,0),
        eccInfo(2,44,16,1,28,0,0),
        eccInfo(3,70,26,1,44,0,0),
        eccInfo(4,100,18,2,32,0,0),
        eccInfo(5,134,24,2,43,0,0),
        eccInfo(6,172,16,4,27,0,0),
        eccInfo(7,196,18,4,31,0,0),
        eccInfo(8,242,22,2,38,2,39),
        eccInfo(9,292,22,3,36,2,37),
        eccInfo(10,346,26,4,43,1,44))

    # Format information for level M, masks 0 to 7, BCH bits included.
    # https://www.thonky.com/qr-code-tutorial/format-version-tables
    format_tab_ = (
        0b101010000010010,
        0b101000100100101,
        0b101111001111100,
        0b101101101001011,
        0b100010111111001,
        0b100000011001110,
        0b100111110010111,
        0b100101010100000)

    # Version information, versions 7 to 10
    version_tab_ = (
        0b000111110010010100,
        0b001000010110111100,
        0b001001101010011001,
        0b001010010011010011)

    # Mask predicates over row and column index arrays
    masks_ = (
        lambda r,c: (r + c) % 2 == 0,
        lambda r,c: r % 2 == 0,
        lambda r,c: c % 3 == 0,
        lambda r,c: (r + c) % 3 == 0,
        lambda r,c: (r // 2 + c // 3) % 2 == 0,
        lambda r,c: (r * c) % 2 + (r * c) % 3 == 0,
        lambda r,c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
        lambda r,c: ((r + c) % 2 + (r * c) % 3) % 2 == 0)

    @staticmethod
    def get_dimension_by_version(version:int)->int:
        if (version < 1 or version > encode.QR_MAX_VERSION):
            raise ValueError(f"Version can be between 1 to {encode.QR_MAX_VERSION}")

        return version * 4 + 17

    @staticmethod
    def get_eccInfo(version:int)->eccInfo:
        if (version < 1 or version > encode.QR_MAX_VERSION):
            raise ValueError(f"Version can be between 1 to {encode.QR_MAX_VERSION}")

        return encode.ecc_table_[version-1]

    @staticmethod
    def find_version(length:int)->int:
        """Smallest version whose capacity holds length bytes.

            Raises:
            -------
            CapacityExceeded
                If even the largest supported version is too small.
        """
        for ei in encode.ecc_table_:
            if (ei.get_capacity() >= length):
                return ei.version

        raise CapacityExceeded(length,encode.ecc_table_[-1].get_capacity())

    @staticmethod
    def for_phrase(phrase):
        """Encoder sized for the phrase, checked before any matrix is built."""
        data = phrasecoder.encode.to_bytes(phrase)
        version = encode.find_version(len(data))
        logger.debug("%d bytes -> version %d",len(data),version)
        return encode(version)

    #
    def prep_finder_patterns(self):
        # also include separators around finder patterns.
        d = self.dimension

        for (y,x) in ((0,0),(0,d-7),(d-7,0)):
            self.qr[max(y-1,0):min(y+8,d),max(x-1,0):min(x+8,d)] = encode.QR_LIGHT
            self.qr[y:y+7,x:x+7] = encode.finder_

    #
    def prep_alignment_patterns(self):
        v = self.ecc_info.version
        d = self.dimension

        if (v < 2):
            return

        # version 2 or greater..
        loc = encode.alignment_loc_[v-2]

        for y in loc:
            for x in loc:
                # skip the ones on top of finder patterns
                if (y <= 8 and x <= 8):
                    continue
                if (y <= 8 and x >= d-8):
                    continue
                if (y >= d-8 and x <= 8):
                    continue

                self.qr[y-2:y+3,x-2:x+3] = encode.alignment_

    #
    def prep_timing_patterns(self):
        d = self.dimension

        # seventh row and column, alignment patterns win
        for n in range(8,d-8):
            pixel = encode.QR_DARK if n % 2 == 0 else encode.QR_LIGHT

            if (self.qr[6,n] == encode.QR_UNSET):
                self.qr[6,n] = pixel
            if (self.qr[n,6] == encode.QR_UNSET):
                self.qr[n,6] = pixel

    #
    def prep_format_area(self):
        d = self.dimension
        cells = []

        # around upper left finder
        for n in range(9):
            cells.append((8,n))
            cells.append((n,8))

        # upper right and lower left
        for n in range(8):
            cells.append((8,d-1-n))
            cells.append((d-1-n,8))

        for (y,x) in cells:
            if (self.qr[y,x] == encode.QR_UNSET):
                self.qr[y,x] = encode.QR_LIGHT

        # dark module
        self.qr[d-8,8] = encode.QR_DARK

    # version information
    def insert_version(self):
        v = self.ecc_info.version
        d = self.dimension

        # For QR code versions greater or equal to 7
        if (v < 7):
            return

        bits = encode.version_tab_[v-7]

        # bit 0 goes to the corner closest to the symbol origin
        for i in range(18):
            pixel = (bits >> i) & 1
            self.qr[d-11+i%3,i//3] = pixel
            self.qr[i//3,d-11+i%3] = pixel

    #
    def insert_level_mask(self, mask : int):
        d = self.dimension
        fmt = f"{encode.format_tab_[mask]:015b}"

        # row 8 from left to right, then column 8 from bottom to top
        cols = (0,1,2,3,4,5,7,8,d-7,d-6,d-5,d-4,d-3,d-2,d-1)
        rows = (d-1,d-2,d-3,d-4,d-5,d-6,d-7,8,7,5,4,3,2,1,0)

        for i in range(15):
            pixel = encode.QR_DARK if fmt[i] == '1' else encode.QR_LIGHT
            self.qr[8,cols[i]] = pixel
            self.qr[rows[i],8] = pixel

    #
    def calc_code_ecc_arrays(self, phrase : bytearray):
        ei = self.ecc_info

        gen = galois.generator.get_by_ecc_codewords(ei.ecc_codewords)
        div = galois.polynomial()

        ewds = []
        cwds = []
        sta = 0

        # group1 is always >= 1 blocks, group2 may be empty
        for (blocks,stp) in ((ei.group1blocks,ei.group1data_codewords),
                             (ei.group2blocks,ei.group2data_codewords)):
            for n in range(blocks):
                blk = bytearray(phrase[sta:sta+stp])
                sta += stp
                cwds.append(blk)
                ewds.append(bytearray(div.polymod(list(blk) + [0]*ei.ecc_codewords,gen)))

        return cwds,ewds

    #
    def interleave_code_ecc_arrays(self, cwds : list, ewds : list) -> bytearray:
        ei = self.ecc_info
        dst = bytearray(ei.total_codewords)
        pos = 0

        # data, shorter blocks run out first
        for col in range(ei.get_max_col()):
            for blk in cwds:
                if (col < len(blk)):
                    dst[pos] = blk[col]
                    pos += 1

        # ecc
        for col in range(ei.ecc_codewords):
            for blk in ewds:
                dst[pos] = blk[col]
                pos += 1

        return dst

    #
    def layout_positions(self):
        """Yields (row, col) of every module in data placement order,
        reserved modules included."""
        d = self.dimension
        upward = True
        x = d - 1

        while (x >= 1):
            # skip the vertical timing pattern
            if (x == 6):
                x = 5

            rows = range(d-1,-1,-1) if upward else range(d)

            for y in rows:
                yield y,x
                yield y,x-1

            upward = not upward
            x -= 2

    #
    def encode_layout(self, codewords : bytearray):
        bits = "".join(f"{b:08b}" for b in codewords)
        n = 0

        for (y,x) in self.layout_positions():
            if (self.reserved[y,x]):
                continue

            # remainder bits are zero
            if (n < len(bits) and bits[n] == '1'):
                self.qr[y,x] = encode.QR_DARK
            else:
                self.qr[y,x] = encode.QR_LIGHT

            n += 1

        # qr_rst is used to reset back to non-masked version..
        np.copyto(self.qr_rst,self.qr)

    #
    def encode_mask(self, mask : int):
        # reset to initial state, pe keeps a reference to self.qr
        np.copyto(self.qr,self.qr_rst)

        r,c = np.indices(self.qr.shape)
        flip = encode.masks_[mask](r,c) & ~self.reserved
        self.qr[flip] ^= 1

        self.insert_level_mask(mask)

    #
    def get_dimension(self):
        return self.dimension

    #
    def get_version(self):
        return self.ecc_info.version

    #
    def get_qr(self):
        return self.qr

    #
    def get_unmasked(self):
        return self.qr_rst

    #
    def get_reserved(self):
        return self.reserved

    #
    def get_mask(self):
        return self.mask

    #
    def get_penalties(self):
        return self.penalties

    #
    def __init__(self, version : int):
        # Prepare for encoding
        self.ecc_info = encode.get_eccInfo(version)

        # Reserve 2-dimensional space for QR code modules
        d = encode.get_dimension_by_version(version)
        self.qr = np.full((d,d),encode.QR_UNSET,dtype=np.uint8,order='C')
        self.qr_rst = np.full((d,d),encode.QR_UNSET,dtype=np.uint8,order='C')
        self.dimension = d
        self.mask = -1
        self.penalties = []
        self.pe = qrpenalty.penalty(self.qr,self.dimension)

        # Build basic layout..
        self.prep_finder_patterns()
        self.prep_alignment_patterns()
        self.prep_timing_patterns()
        self.prep_format_area()
        self.insert_version()

        # Going to be static..
        self.reserved = self.qr != encode.QR_UNSET

    def generate_qr_code(self, phrase):
        pc = phrasecoder.encode(max_len=self.ecc_info.data_codewords)
        ph = pc.encode_phrase(phrase)
        dat,ecc = self.calc_code_ecc_arrays(ph)
        res = self.interleave_code_ecc_arrays(dat,ecc)

        self.encode_layout(res)

        lowest_mask = -1
        lowest_penalty = sys.maxsize
        self.penalties = []

        for mask in range(8):
            self.encode_mask(mask)
            p = self.pe.calc_penalty()
            self.penalties.append(p)
            logger.debug("mask %d penalty %d",mask,p)

            # ties keep the lower mask
            if (p < lowest_penalty):
                lowest_mask = mask
                lowest_penalty = p

        self.mask = lowest_mask
        self.encode_mask(lowest_mask)
        logger.debug("version %d mask %d selected",self.ecc_info.version,lowest_mask)

        return self.qr
