# examples/structure_stream_demo.py
import asyncio
from typing import List

from pydantic import BaseModel, Field

from typedprompt.core.structure import StreamingPipeline, StructureEngine, StructureParseError, parse_structured_output


# 定义数据模型
class Task(BaseModel):
    id: int = Field(description="任务编号")
    title: str = Field(description="任务标题")


async def fake_llm_stream():
    """模拟 LLM 的流式输出（片段边界是任意的）"""
    text = (
        "当然，以下是任务列表：\n```json\n"
        '[{"id": 1, "title": "写文档"}, {"id": "坏数据", "title": "跳过"}, '
        '{"id": 3, "title": "发布"}]\n```\n还需要别的吗？'
    )
    for i in range(0, len(text), 9):
        await asyncio.sleep(0.05)
        yield text[i:i + 9]


async def main():
    print("=== typedprompt 结构化输出示例 ===\n")

    # 1. 批处理解析
    print("1. 从 Markdown 代码块批量解析")
    markdown_text = '这是结果：\n```json\n[{"id": 1, "title": "写文档"}, {"id": 2, "title": "发布"}]\n```'
    tasks = StructureEngine.parse(markdown_text, List[Task])
    print(f"   解析结果: {tasks}\n")

    # 2. 流式解析：元素完成一个输出一个，非法元素被跳过
    print("2. 流式逐个输出元素")
    pipeline = StreamingPipeline(List[Task])
    async for task in pipeline.run(fake_llm_stream()):
        print(f"   收到任务: #{task.id} {task.title}")
    print(f"   输出下标: {pipeline.emitted_indices}\n")

    # 3. 严格模式：失败时拿到完整错误轨迹
    print("3. 严格模式解析")
    try:
        parse_structured_output("抱歉，我无法完成这个请求。", Task)
    except StructureParseError as e:
        print(f"   解析失败:\n{e.get_detailed_error()}\n")

    # 4. JSON Schema（可拼接进提示词）
    print("4. 生成 JSON Schema")
    print(f"   {StructureEngine.to_json_schema(Task)['properties']}")


if __name__ == "__main__":
    asyncio.run(main())
