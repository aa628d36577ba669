#!/usr/bin/env python
"""
Scanned Exam Grader - Application Entry Point

Usage:
    python run.py [--host HOST] [--port PORT] [--reload]

Examples:
    python run.py                    # Start with defaults
    python run.py --reload           # Start with auto-reload
    python run.py --port 8080        # Start on custom port

Grading thresholds and the essay provider are read from the environment
(or .env): FUZZY_MATCH_THRESHOLD, SHORT_ANSWER_THRESHOLD, ESSAY_PROVIDER.
"""
import argparse
import uvicorn

from exam_grading.config import settings


def main():
    parser = argparse.ArgumentParser(
        description="Scanned Exam Grader API Server"
    )
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to bind (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to bind (default: {settings.PORT})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    args = parser.parse_args()

    print(f"""
╔══════════════════════════════════════════════════════════════╗
              Scanned Exam Grader API Server
╠══════════════════════════════════════════════════════════════╣
    Host: {args.host:<15}
    Port: {args.port:<15}
    Reload: {'Enabled' if args.reload else 'Disabled':<12}
    Essay provider: {settings.ESSAY_PROVIDER:<12}
╠══════════════════════════════════════════════════════════════╣
    API Docs: http://{args.host}:{args.port}/docs
    ReDoc:    http://{args.host}:{args.port}/redoc
╚══════════════════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "exam_grading.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()
