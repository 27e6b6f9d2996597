from dotinstall.core.engine.executor import execute_profile, plan_profile, run_component

__all__ = ["execute_profile", "plan_profile", "run_component"]
