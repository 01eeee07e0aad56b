list_files_prompt = """
Tool name: list_files
Tool description:
Recursively lists files in a directory of the workspace. Safe and sandboxed to the workspace root.
Output is one relative path per line, sorted. Capped at 1000 entries; the remainder is reported as "... and N more files."

Usage
- Use list_files to explore directory structure or see what is inside a folder.
- Do NOT use bash ls/find; use this tool for consistent, safe output.
- Ignored names are pruned: nothing beneath an ignored directory is listed.

Parameters (JSON object)
- path (string, optional, default ".")
  Directory to list, relative to the workspace root.
- recursive (boolean, optional, default true)
  false -> list only direct children; directories end with "/"
- ignore (array of strings, optional, default [".git", "node_modules", "dist", "coverage"])
  Glob patterns to skip. "name" or "*.log" match a basename at any depth.
  "src/test" (contains "/") matches that exact relative path only.
  "build/" matches the name and everything beneath it.
  Passing a list replaces the defaults; [] disables ignoring.

Examples
1) List the whole workspace

list_files[{}]

2) List direct children of src/

list_files[{"path": "src", "recursive": false}]

3) List everything except logs and the fixtures folder

list_files[{"ignore": [".git", "node_modules", "*.log", "tests/fixtures"]}]
"""
