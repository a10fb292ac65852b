import argparse
import sys
from pathlib import Path

import numpy as np

from audio_loader import AudioHandler, FormatError
from audio_exporter import AudioExporter
from pipeline import AudioPipeline, build_default_chain

# 导入可视化分析工具
from analysis import AudioAnalyzer, to_float_channel


def build_parser():
    parser = argparse.ArgumentParser(
        prog="lofi",
        description="Lo-fi degrader: 白噪声 → 粉红噪声 → 失真 → 颤音 → 电话 → 环形调制 → 降比特",
    )
    parser.add_argument("input", help="输入音频 (WAV；其他格式会先用 pydub 转成 WAV)")
    parser.add_argument("output", help="输出 WAV 路径")
    parser.add_argument("--seed", type=int, default=None, help="随机种子，固定后输出可复现")
    parser.add_argument("--plot", metavar="PNG", default=None, help="生成频谱/波形对比图")
    parser.add_argument("--mp3", action="store_true", help="额外导出一份 MP3")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    loader = AudioHandler()
    exporter = AudioExporter(output_dir=Path(args.output).parent)
    chain = build_default_chain(np.random.default_rng(args.seed))
    pipeline = AudioPipeline(chain, loader=loader, exporter=exporter)

    print("运行链路:")
    for effect in chain:
        print(f"   - {effect.name} {effect.get_params()}")

    converted = None
    try:
        wav_path = args.input
        if Path(wav_path).suffix.lower() != ".wav":
            converted = wav_path = loader.convert_mp3_to_wav(wav_path)

        original, processed, spec = pipeline.run(wav_path, args.output)

        # 信号分析 (只看第一个声道)
        org = to_float_channel(original, spec.num_channels)
        proc = to_float_channel(processed, spec.num_channels)
        snr = AudioAnalyzer.calculate_snr(org, proc)
        print(f"信噪比 (SNR): {snr:.2f} dB")

        if args.plot:
            AudioAnalyzer.plot_comparison(
                org, proc, spec.samplerate,
                title=f"{Path(args.output).stem} (SNR={snr:.1f}dB)",
                filename=args.plot,
            )

        if args.mp3:
            mp3_path = exporter.export_to_mp3(args.output)
            print(f"MP3 已导出: {mp3_path}")

    except (FormatError, OSError) as e:
        print(f"错误: {e}", file=sys.stderr)
        return 1

    finally:
        if converted is not None:
            loader.remove_temp(converted)

    return 0


if __name__ == "__main__":
    sys.exit(main())
