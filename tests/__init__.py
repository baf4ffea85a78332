"""HabitFlow test-suite."""
