#
# Turn finished QR-code matrices into SVG markup or Pillow images.
#

import numpy as np
from PIL import Image
from . import qrcoder

#
def check_geometry_(module_size : int, quiet_zone : int):
    if (module_size < 1):
        raise ValueError(f"Module size must be positive, got {module_size}")

    if (quiet_zone < 0):
        raise ValueError(f"Quiet zone cannot be negative, got {quiet_zone}")

#
def svg(qr, module_size : int=4, quiet_zone : int=4) -> str:
    """Vector markup of the matrix: a white background and one black
    square per dark module, shifted by the quiet zone.

        Parameters:
        -----------
        qr : numpy.ndarray
            Square matrix of QR_LIGHT and QR_DARK modules.
        module_size : int
            Side of one module in pixels.
        quiet_zone : int
            Margin around the symbol in modules.

        Return:
        -------
            str containing a standalone <svg> element of
            (side + 2 * quiet_zone) * module_size pixels.
    """
    check_geometry_(module_size,quiet_zone)

    total = (qr.shape[0] + quiet_zone * 2) * module_size
    out = [f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {total} {total}" width="{total}" height="{total}">',
           f'<rect width="{total}" height="{total}" fill="white"/>']

    # row by row, left to right
    for (y,x) in np.argwhere(qr == qrcoder.encode.QR_DARK).tolist():
        px = (x + quiet_zone) * module_size
        py = (y + quiet_zone) * module_size
        out.append(f'<rect x="{px}" y="{py}" width="{module_size}" height="{module_size}" fill="black"/>')

    out.append('</svg>')
    return "".join(out)

#
def image(qr, module_size : int=4, quiet_zone : int=4) -> Image.Image:
    """Greyscale Pillow image with the same geometry as svg()."""
    check_geometry_(module_size,quiet_zone)

    pixels = np.where(qr == qrcoder.encode.QR_DARK,0,255).astype(np.uint8)
    pixels = np.pad(pixels,quiet_zone,mode="constant",constant_values=255)
    pixels = pixels.repeat(module_size,axis=0).repeat(module_size,axis=1)

    return Image.fromarray(pixels)

#
def encode(text, module_size : int=4, quiet_zone : int=4) -> str:
    """Encode text (str or bytes) into a QR-code and return it as SVG.

        Raises:
        -------
        qrcoder.CapacityExceeded
            If text is longer than the largest supported version holds.
    """
    check_geometry_(module_size,quiet_zone)

    qr = qrcoder.encode.for_phrase(text)
    return svg(qr.generate_qr_code(text),module_size,quiet_zone)
