"""
CLI エントリーポイント。--serve, --show-config, --init-config を処理。
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

load_dotenv()

# プロジェクトルートをパスに追加
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Asfanut collectibles store")
    parser.add_argument("--serve", action="store_true", help="Run the REST persistence server")
    parser.add_argument("--host", type=str, default=None, help="Bind host (default: server.host)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: server.port / PORT)")
    parser.add_argument("--db-path", type=str, default=None, help="SQLite file for the server")
    parser.add_argument("--show-config", action="store_true", help="Print resolved settings and exit")
    parser.add_argument("--init-config", action="store_true", help="Write default config.yaml if missing")
    args = parser.parse_args(argv)

    from asfanut.config import ROOT as CONFIG_ROOT, default_config, save_config
    from asfanut.settings import load_settings
    from asfanut.util.log import get_logger, setup_logging

    setup_logging()
    logger = get_logger("asfanut")

    if args.init_config:
        path = CONFIG_ROOT / "config.yaml"
        if path.exists():
            logger.info("config.yaml already exists: %s", path)
        else:
            save_config(default_config(), str(path))
            logger.info("wrote %s", path)
        return

    settings = load_settings()

    if args.show_config:
        print(yaml.dump(settings.__dict__, allow_unicode=True, default_flow_style=False, sort_keys=False))
        return

    if not args.serve:
        parser.print_help()
        sys.exit(0)

    import uvicorn

    from asfanut.server import create_app

    db_path = args.db_path or settings.server_db_path
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    host = args.host or settings.server_host
    port = args.port or settings.server_port
    logger.info("starting server host=%s port=%s db=%s", host, port, db_path)
    uvicorn.run(create_app(db_path), host=host, port=port)


if __name__ == "__main__":
    main()
