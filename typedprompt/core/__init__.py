# typedprompt/core/__init__.py
"""
核心模块：日志、配置、错误、协议、结构化输出管线与 Prompt 对象
"""
