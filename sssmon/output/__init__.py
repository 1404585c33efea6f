from .sink import OutputSink, render_log_file_name

__all__ = ['OutputSink', 'render_log_file_name']
