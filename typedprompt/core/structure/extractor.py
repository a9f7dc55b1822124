# typedprompt/core/structure/extractor.py
"""
代码块提取模块

从 LLM 的对话式输出中截取“最可能包含结构化数据”的片段，
以 Markdown 围栏（``` 或 ~~~）作为定位标记：

- 没有围栏：整段文本即为候选窗口
- 只有一个围栏：返回围栏之后直到文本末尾的全部内容
  （流式场景中最常见：代码块已经打开，但闭合围栏尚未到达）
- 两个及以上围栏：只返回第一个和第二个围栏之间的内容，其后的代码块忽略
"""
from __future__ import annotations

import re
from typing import List

# 围栏行：可选的前导换行与空白、三个及以上的 ` 或 ~、可选语言标记、可选尾随空白与换行
_RE_FENCE = re.compile(r"\n?[ \t]*(?:`{3,}|~{3,})[\w+.#-]*[ \t]*\n?")


def find_fences(text: str) -> List[re.Match[str]]:
    """返回文本中所有围栏标记的匹配结果（按出现顺序）"""
    return list(_RE_FENCE.finditer(text))


def extract_code_block(text: str) -> str:
    """
    截取第一个代码块的内容。

    纯函数且幂等：对不再包含围栏的输出再次调用，结果不变。
    """
    fences = find_fences(text)

    if not fences:
        return text

    if len(fences) == 1:
        return text[fences[0].end():]

    return text[fences[0].end():fences[1].start()]
