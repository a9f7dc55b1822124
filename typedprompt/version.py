# typedprompt/version.py
"""
版本管理模块

通过单一来源 (Single Source of Truth) 管理版本号，
避免 __init__.py、pyproject 等多处手写版本号导致不一致。
"""

__version__: str = "0.1.0"
__license__: str = "MIT"
