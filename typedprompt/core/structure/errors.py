# typedprompt/core/structure/errors.py
"""
结构化解析异常

单独成模块，parser / sync 都可以引用而不产生循环导入。
"""
from __future__ import annotations

from typing import Dict, List, Optional

from typedprompt.core.error_codes import ErrorCode
from typedprompt.core.exceptions import TypedPromptError


class StructureParseError(TypedPromptError, ValueError):
    """
    严格模式下输出无法转换为目标 Schema

    run / stream 从不抛出它（失败一律降级为 None 或不输出），
    只有 parse_structured_output 会抛出，并附带每一步的失败原因。

    属性:
        attempts:    [{"strategy": 步骤名, "error": 错误信息}, ...]，按执行顺序
        raw_content: 被解析的原始文本
    """

    default_code = ErrorCode.STRUCTURE_PARSE_FAILED

    def __init__(
        self,
        message: str,
        attempts: Optional[List[Dict[str, str]]] = None,
        raw_content: Optional[str] = None,
    ):
        super().__init__(message, context={"steps": len(attempts or [])})
        self.attempts: List[Dict[str, str]] = list(attempts or [])
        self.raw_content = raw_content

    def get_detailed_error(self, preview_chars: int = 200) -> str:
        """多行的人类可读报告，用于日志或调试输出"""
        report = [f"结构化解析失败: {self.args[0]}"]

        if self.attempts:
            report.append("")
            report.append("失败步骤:")
            report.extend(
                f"  {n}. {a.get('strategy', '?')}: {a.get('error', '')}"
                for n, a in enumerate(self.attempts, 1)
            )

        if self.raw_content:
            snippet = self.raw_content[:preview_chars].replace("\n", "\\n")
            suffix = "..." if len(self.raw_content) > preview_chars else ""
            report.append("")
            report.append(f"原始内容预览: {snippet}{suffix}")

        return "\n".join(report)
