"""list_files / search 工具测试

运行方式：
    # 运行所有测试
    python -m pytest tests/ -v

    # 仅运行工具级测试
    python -m pytest tests/test_list_files_tool.py tests/test_search_tool.py -v
"""
