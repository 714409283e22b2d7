"""Backends for opldat output generation (OPL .dat files)."""

from .dat_writer import generate_dat, render_element, save_data_file, save_temp_data_file

__all__ = ["generate_dat", "render_element", "save_data_file", "save_temp_data_file"]
