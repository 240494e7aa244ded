"""核心模块：会话、状态机、接口与服务

状态机位于 radialwave.core.recording_state_machine。
"""
