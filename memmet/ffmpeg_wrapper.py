import json
import re
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

from .exceptions import FFmpegError, FFmpegNotInstalled
from .logging_conf import logger

DEFAULT_SILENCE_SOURCE = "anullsrc=channel_layout=stereo"

_TIME_RE = re.compile(r"time=(\d{2}):(\d{2}):(\d{2}\.\d{2})")


def format_command(cmd: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(arg)) for arg in cmd)


class FFmpegWrapper:
    def __init__(self, ffmpeg_path="ffmpeg", ffprobe_path="ffprobe", silence_source=DEFAULT_SILENCE_SOURCE):
        self.ffmpeg_path = ffmpeg_path
        self.ffprobe_path = ffprobe_path
        self.silence_source = silence_source

    def ensure_installed(self):
        missing = [name for name in (self.ffmpeg_path, self.ffprobe_path) if shutil.which(name) is None]
        if missing:
            raise FFmpegNotInstalled(f"Required tools not found on PATH: {', '.join(missing)}")

    def probe(self, input_file) -> Dict:
        cmd = [self.ffprobe_path, '-v', 'error', '-show_format', '-show_streams', '-print_format', 'json', str(input_file)]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            return json.loads(result.stdout)
        except subprocess.CalledProcessError as e:
            error_message = f"FFprobe failed for {input_file}:\n"
            error_message += f"Command: {format_command(cmd)}\n"
            error_message += f"Return code: {e.returncode}\n"
            error_message += f"Standard error: {e.stderr}\n"
            raise FFmpegError(error_message)
        except OSError as e:
            raise FFmpegError(f"Could not run {self.ffprobe_path} for {input_file}: {e}")
        except json.JSONDecodeError as e:
            raise FFmpegError(f"FFprobe output is not valid JSON for {input_file}: {str(e)}")

    def build_concat_command(
        self,
        input_files: Sequence[Path],
        filter_complex: str,
        map_args: Sequence[str],
        video_codec: str,
        output_file: Path,
        overwrite: bool,
        silence_input: bool = False,
        silence_duration: Optional[float] = None,
    ) -> List[str]:
        input_args = []
        for file in input_files:
            input_args.extend(['-i', str(file)])

        if silence_input:
            # Lands at input index len(input_files)
            input_args.extend(['-f', 'lavfi'])
            if silence_duration:
                input_args.extend(['-t', f"{silence_duration:.3f}"])
            input_args.extend(['-i', self.silence_source])

        return [
            self.ffmpeg_path,
            *input_args,
            '-filter_complex', filter_complex,
            *map_args,
            '-c:v', video_codec,
            '-y' if overwrite else '-n',
            str(output_file),
        ]

    def concatenate(self, cmd: Sequence[str], total_duration: Optional[float] = None) -> str:
        """
        Run a command built by build_concat_command and wait for it.

        Returns the captured stderr of ffmpeg. Progress is reported through
        tqdm when the total duration of the inputs is known.
        """
        logger.debug("Running: %s", format_command(cmd))
        try:
            process = subprocess.Popen(list(cmd), stderr=subprocess.PIPE, universal_newlines=True)
        except OSError as e:
            raise FFmpegError(f"Could not start {self.ffmpeg_path}: {e}")

        pbar = tqdm(total=100, unit='%', desc="Concatenating videos", disable=not total_duration)

        error_output = ""
        for line in process.stderr:
            error_output += line
            time_match = _TIME_RE.search(line)
            if time_match and total_duration:
                hours, minutes, seconds = map(float, time_match.groups())
                current_time = hours * 3600 + minutes * 60 + seconds
                progress = min(int((current_time / total_duration) * 100), 100)
                pbar.update(progress - pbar.n)

        pbar.close()
        process.wait()
        if process.returncode != 0:
            raise FFmpegError(f"FFmpeg concatenation failed. Error output:\n{error_output}")
        return error_output
