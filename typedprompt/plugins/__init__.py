# typedprompt/plugins/__init__.py
"""插件包：模型驱动等可替换组件"""
