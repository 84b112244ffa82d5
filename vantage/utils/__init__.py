"""通用工具集合."""
