"""buildlayout - 构建产物目录布局与清理工具"""

__version__ = "0.1.0"
