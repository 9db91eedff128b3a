#!/usr/bin/env python3
"""
Run the semantic search API under uvicorn.
Configuration comes from the environment (see semsearch.core.config).
"""

import argparse
import sys

import uvicorn

from semsearch.core.config import load_settings, validate_settings


def main():
    parser = argparse.ArgumentParser(description='Serve the Semantic Search API')
    parser.add_argument('--port', type=int, default=8000,
                       help='Port to serve on (default: 8000)')
    parser.add_argument('--host', default='127.0.0.1',
                       help='Host to bind to (default: 127.0.0.1)')
    parser.add_argument('--reload', action='store_true',
                       help='Reload on code changes (development only)')
    parser.add_argument('--check', action='store_true',
                       help='Validate configuration and exit')

    args = parser.parse_args()

    settings = load_settings()
    issues = validate_settings(settings)

    if args.check:
        if issues:
            for issue in issues:
                print(f"ERROR: {issue}")
            sys.exit(1)
        print("Configuration OK")
        return

    for issue in issues:
        print(f"WARNING: {issue}")

    print(f"Semantic Search API on http://{args.host}:{args.port}")
    print(f"Vector store: {settings.vector_provider}, embeddings: {settings.embed_provider}")

    uvicorn.run(
        "semsearch.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
