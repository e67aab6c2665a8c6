"""
Strands Analysis
文字トライグラムの頻度から、各文字の周囲に現れやすい文字を矢印で可視化するGUIアプリケーション

必要なライブラリ:
pip install matplotlib numpy

使い方:
python main.py -w corpus.txt [-w another.txt ...]
"""

import logging
import sys
import tkinter as tk
from pathlib import Path
from tkinter import ttk, scrolledtext, filedialog, messagebox

import matplotlib.pyplot as plt
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from letterstrands import cli
from letterstrands.arrows import collect_intents
from letterstrands.errors import SourceOpenFailure
from letterstrands.files import FileService
from letterstrands.grid import split_lines
from letterstrands.settings import DEFAULT_SETTINGS, StrandsSettings
from letterstrands.trigrams import TrigramModel
from letterstrands.visualization import VisualizationService

logger = logging.getLogger(__name__)


class StrandsAnalyzer:
    def __init__(self, root, model: TrigramModel, settings: StrandsSettings = DEFAULT_SETTINGS):
        self.root = root
        self.root.title(settings.window_title)
        self.root.geometry(settings.window_geometry)

        # データ保持（モデルは起動時に読み込んだコーパスを共有）
        self.model = model
        self.settings = settings
        self.file_service = FileService()
        self.visual_service = VisualizationService(settings)
        self.freq_fig = None

        self.setup_ui()
        self.redraw()
        self.refresh_frequency_chart()

    def setup_ui(self):
        # メインフレーム
        main_frame = ttk.Frame(self.root, padding="10")
        main_frame.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))

        # ノートブック（タブ）
        self.notebook = ttk.Notebook(main_frame)
        self.notebook.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))

        # タブ1: 矢印表示
        self.setup_strands_tab()

        # タブ2: トライグラム頻度
        self.freq_frame = ttk.Frame(self.notebook, padding="10")
        self.notebook.add(self.freq_frame, text="Trigram frequency")

        # しきい値スライダー（1が最も緩い）
        self.slider_var = tk.DoubleVar(value=self.settings.slider_default)
        ttk.Scale(main_frame, from_=0.0, to=1.0, orient=tk.HORIZONTAL,
                  variable=self.slider_var, command=self.on_slider).grid(row=1, column=0, sticky=(tk.W, tk.E), pady=5)

        # テキストエリア（編集のたびに再描画）
        self.text_area = scrolledtext.ScrolledText(main_frame, width=80, height=6, wrap=tk.NONE)
        self.text_area.grid(row=2, column=0, sticky=(tk.W, tk.E), pady=5)
        self.text_area.bind("<<Modified>>", self.on_text_modified)

        # ボタン
        btn_frame = ttk.Frame(main_frame)
        btn_frame.grid(row=3, column=0, sticky=tk.W, pady=5)
        ttk.Button(btn_frame, text="Load", command=self.on_load).pack(side=tk.LEFT, padx=5)
        ttk.Button(btn_frame, text="Clear", command=self.on_clear).pack(side=tk.LEFT, padx=5)
        ttk.Button(btn_frame, text="Save image",
                   command=lambda: self.save_figure(self.strands_fig, "strands")).pack(side=tk.LEFT, padx=5)

        # ウィンドウのリサイズ設定
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)
        main_frame.columnconfigure(0, weight=1)
        main_frame.rowconfigure(0, weight=1)

    def setup_strands_tab(self):
        strands_frame = ttk.Frame(self.notebook)
        self.notebook.add(strands_frame, text="Strands")

        # スクロール可能なキャンバスに Figure を埋め込む
        yscroll = ttk.Scrollbar(strands_frame, orient=tk.VERTICAL)
        yscroll.pack(side=tk.RIGHT, fill=tk.Y)
        xscroll = ttk.Scrollbar(strands_frame, orient=tk.HORIZONTAL)
        xscroll.pack(side=tk.BOTTOM, fill=tk.X)

        self.scroll_canvas = tk.Canvas(strands_frame, background="white",
                                       xscrollcommand=xscroll.set, yscrollcommand=yscroll.set)
        self.scroll_canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        xscroll.config(command=self.scroll_canvas.xview)
        yscroll.config(command=self.scroll_canvas.yview)

        gap = self.settings.letter_gap
        self.strands_fig, self.strands_ax = self.visual_service.build_strands_figure(gap * 2, gap * 2)
        self.strands_canvas = FigureCanvasTkAgg(self.strands_fig, self.scroll_canvas)
        widget = self.strands_canvas.get_tk_widget()
        self.scroll_canvas.create_window((0, 0), window=widget, anchor=tk.NW)

    def on_slider(self, value):
        step = self.settings.slider_step
        snapped = round(float(value) / step) * step
        if snapped != self.slider_var.get():
            self.slider_var.set(snapped)
        self.redraw()

    def on_text_modified(self, event=None):
        # edit_modified(False) でもイベントが発生するため、フラグで判定
        if not self.text_area.edit_modified():
            return
        self.text_area.edit_modified(False)
        self.redraw()

    def redraw(self):
        lines = split_lines(self.text_area.get("1.0", "end-1c"))
        intents = collect_intents(lines, self.model, self.slider_var.get(), self.settings)
        width, height = self.visual_service.draw_strands(self.strands_ax, intents)

        # 内容の大きさに合わせて Figure とスクロール範囲を更新
        widget = self.strands_canvas.get_tk_widget()
        widget.configure(width=width, height=height)
        dpi = self.settings.dpi
        self.strands_fig.set_size_inches(width / dpi, height / dpi)
        self.strands_canvas.draw_idle()
        self.scroll_canvas.config(scrollregion=(0, 0, width, height))

    def on_load(self):
        filepath = filedialog.askopenfilename(
            filetypes=[
                ("Text files", "*.txt"),
                ("All files", "*.*")
            ]
        )
        if not filepath:
            return
        try:
            self.model.ingest_path(filepath)
        except SourceOpenFailure as e:
            logger.error("%s", e)
            messagebox.showerror("Error", f"Could not open {e.path}: {e.reason}")
            return
        except Exception as e:
            # 読み込み途中の失敗: それまでのカウントは残る
            logger.exception("Failed to read %s", filepath)
            messagebox.showerror("Error", f"Failed to read the file: {e}")
        self.redraw()
        self.refresh_frequency_chart()

    def on_clear(self):
        self.model.clear()
        self.redraw()
        self.refresh_frequency_chart()

    def refresh_frequency_chart(self):
        # 既存のウィジェットをクリア
        for widget in self.freq_frame.winfo_children():
            widget.destroy()
        if self.freq_fig is not None:
            plt.close(self.freq_fig)

        self.freq_fig = self.visual_service.build_frequency_figure(self.model)
        if self.freq_fig is None:
            ttk.Label(self.freq_frame, text="No trigrams loaded. Use Load or -w to read a corpus.").pack(pady=20)
            return

        canvas = FigureCanvasTkAgg(self.freq_fig, self.freq_frame)
        canvas.draw()
        canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True)

        # 保存ボタン群
        fig = self.freq_fig
        btn_frame = ttk.Frame(self.freq_frame)
        btn_frame.pack(pady=5)
        ttk.Button(btn_frame, text="Save image",
                   command=lambda: self.save_figure(fig, "trigrams")).pack(side=tk.LEFT, padx=5)
        ttk.Button(btn_frame, text="Export CSV", command=self.export_frequency_csv).pack(side=tk.LEFT, padx=5)

    def export_frequency_csv(self):
        filepath = filedialog.asksaveasfilename(
            defaultextension=".csv",
            initialfile="trigrams.csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")]
        )
        if not filepath:
            return
        try:
            self.file_service.write_frequency_csv(filepath, self.model)
            messagebox.showinfo("Done", f"Saved: {filepath}")
        except Exception as e:
            logger.exception("CSV export failed")
            messagebox.showerror("Error", f"Failed to save: {e}")

    def save_figure(self, fig, prefix: str, fmt: str = "png"):
        """matplotlib Figure をファイルに保存する共通処理。"""
        filepath = filedialog.asksaveasfilename(
            defaultextension=f".{fmt}",
            initialfile=f"{prefix}.{fmt}",
            filetypes=[
                ("PNG files", "*.png"),
                ("SVG files", "*.svg"),
                ("All files", "*.*"),
            ],
        )
        if not filepath:
            return
        try:
            ext = Path(filepath).suffix.lower().lstrip(".") or fmt
            fig.savefig(filepath, format=ext, bbox_inches="tight")
            messagebox.showinfo("Done", f"Saved: {filepath}")
        except Exception as e:
            logger.exception("Saving %s failed", filepath)
            messagebox.showerror("Error", f"Failed to save: {e}")


def run_gui(model):
    root = tk.Tk()
    app = StrandsAnalyzer(root, model)
    root.mainloop()


def main():
    sys.exit(cli.main(sys.argv[1:], run_gui=run_gui))


if __name__ == "__main__":
    main()
