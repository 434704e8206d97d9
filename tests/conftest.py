from undo_history.runtime import telemetry

telemetry.configure(preset="quiet")
