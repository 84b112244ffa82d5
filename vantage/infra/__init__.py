"""基础设施层(请求钩子等)."""
