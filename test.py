import argparse
import logging
import sys
from urllib.parse import urlencode
from upiqr import qrcoder as q
from upiqr import qrrender as r


def upi_url(pa, pn, am, cu="INR", tn="Expense Settlement"):
    params = {"pa":pa.strip(),"pn":pn.strip(),"am":f"{am:.2f}","cu":cu,"tn":tn}
    return "upi://pay?" + urlencode(params)


parser = argparse.ArgumentParser(description="Write a UPI payment QR-code as SVG.")
parser.add_argument("output",help="SVG file to create")
parser.add_argument("--text",help="raw payload, overrides the UPI fields")
parser.add_argument("--pa",default="a@b",help="payee UPI id")
parser.add_argument("--pn",default="C",help="payee name")
parser.add_argument("--am",type=float,default=10.0,help="amount")
parser.add_argument("--cu",default="INR",help="currency")
parser.add_argument("--tn",default="x",help="transaction note")
parser.add_argument("--module-size",type=int,default=4)
parser.add_argument("--quiet-zone",type=int,default=4)
parser.add_argument("--show",action="store_true",help="also show the code with Pillow")
parser.add_argument("-v","--verbose",action="store_true")
args = parser.parse_args()

logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")

phrase = args.text if args.text is not None else upi_url(args.pa,args.pn,args.am,args.cu,args.tn)

try:
    qr = q.encode.for_phrase(phrase)
except q.CapacityExceeded as e:
    logging.error("%s",e)
    sys.exit(1)

qr_code = qr.generate_qr_code(phrase)
logging.info("%s -> version %d, mask %d",phrase,qr.get_version(),qr.get_mask())

with open(args.output,"w",encoding="utf-8") as f:
    f.write(r.svg(qr_code,args.module_size,args.quiet_zone))

if (args.show):
    ima = r.image(qr_code,args.module_size,args.quiet_zone)
    ima.show()
