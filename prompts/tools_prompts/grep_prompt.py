grep_prompt = """
Tool name: search
Tool description:
Searches file contents with grep (extended regex). Returns matching lines as "path:line:content".
Capped at 500 lines; the remainder is reported as "... and N more matches."

Usage
- ALWAYS use search for looking inside file contents.
- Do NOT call shell grep/rg; this tool is sandboxed to the workspace root.
- pattern is an extended regular expression (POSIX ERE); include/exclude are globs.
- Binary files are skipped.

Parameters (JSON object)
- pattern (string, required)
  ERE pattern. Examples: "TODO", "class [A-Z][a-zA-Z]+", "import .* from".
- path (string, optional, default ".")
  Directory (or file) to search, relative to the workspace root.
- include (array of strings, optional)
  Only search files whose name matches one of these globs. Example: ["*.ts", "*.md"].
- exclude (array of strings, optional, default [".git", "node_modules", "dist", "coverage"])
  Skip files AND directories whose name matches one of these globs.
- caseSensitive (boolean, optional, default false)
  false -> case-insensitive (default)
  true  -> case-sensitive

Examples
1) Find TODO comments in TypeScript files

search[{"pattern": "TODO", "include": ["*.ts"]}]

2) Case-sensitive search for a class name under src/

search[{"pattern": "class UserService", "path": "src", "caseSensitive": true}]

3) Search everything except tests

search[{"pattern": "console\\\\.log", "exclude": [".git", "node_modules", "*.test.ts"]}]
"""
