# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import argparse
import os

from blog_backend.app import create_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the blog API development server")
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "3000")))
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)


if __name__ == "__main__":
    main()
