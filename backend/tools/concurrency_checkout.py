"""
Fire concurrent checkouts at a running server.

All requests use the same email, so afterwards exactly one user row should
exist for it (a first-time email racing itself loses on the unique index and
comes back as a 500); with more workers than DB_POOL_SIZE the extra requests queue
for a connection instead of failing.

Usage:
    python tools/concurrency_checkout.py --workers 20 --variant 1 --email load@example.com
"""
import argparse
import concurrent.futures
import json
import os
import time
from uuid import uuid4

import requests

BASE = os.environ.get("YONUTRI_BASE", "http://127.0.0.1:5500")


def checkout_task(i, payload):
    try:
        r = requests.post(f"{BASE}/api/checkout", json=payload, timeout=60)
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--workers", type=int, default=20)
    parser.add_argument("--variant", type=int, default=1)
    parser.add_argument("--qty", type=int, default=1)
    parser.add_argument("--email", default=f"load-{uuid4().hex[:6]}@example.com")
    parser.add_argument("--coupon", default="")
    args = parser.parse_args()

    start = time.time()
    with concurrent.futures.ThreadPoolExecutor(max_workers=args.workers) as ex:
        futures = [
            ex.submit(
                checkout_task,
                i,
                {
                    "email": args.email,
                    "items": [{"variantId": args.variant, "qty": args.qty}],
                    "couponCode": args.coupon,
                    "sessionId": f"load-{i}",
                },
            )
            for i in range(args.workers)
        ]
        results = [f.result() for f in concurrent.futures.as_completed(futures)]
    elapsed = time.time() - start

    by_status = {}
    for i, status, body in sorted(results, key=lambda r: r[0]):
        by_status[status] = by_status.get(status, 0) + 1
        print(i, status, body)
    print(json.dumps({"elapsed_s": round(elapsed, 2), "by_status": by_status}, default=str))


if __name__ == "__main__":
    main()
