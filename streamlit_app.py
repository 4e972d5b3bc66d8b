"""
Streamlit Community Cloud 用エントリーポイント。
asfanut/web.py の内容をそのまま使用。
"""
import sys
from pathlib import Path

# プロジェクトルートをパスに追加（import より前に必須）
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import asfanut.web  # noqa: E402,F401
