"""
Main entry point for the Quote Relay.
Provides the command-line interface for the server and the client.
"""

import asyncio
import argparse
import sys
from typing import Optional

from utils import api_logger, client_logger, config_manager, QuoteSystemError


class QuoteSystem:
    """报价中继主类"""

    def __init__(self):
        self.config = config_manager

    async def start_api_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """启动API服务器"""
        import uvicorn
        from api.app import app as api_app

        api_config = self.config.get_api_config()

        # 命令行参数优先于配置文件
        final_host = host if host is not None else api_config.host
        final_port = port if port is not None else api_config.port

        api_logger.info(f"[Main] Starting API server on {final_host}:{final_port}...")

        config = uvicorn.Config(
            api_app,
            host=final_host,
            port=final_port,
            workers=api_config.workers,
            log_level="info"
        )
        server = uvicorn.Server(config)
        await server.serve()

    async def run_client(self, url: Optional[str] = None, output: Optional[str] = None,
                         timeout: Optional[float] = None) -> str:
        """调用服务端一次并写入文件"""
        from client import QuoteClient

        quote_client = QuoteClient(server_url=url, timeout=timeout, output_file=output)
        return await quote_client.run()


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description="Quote Relay - 美元兑雷亚尔报价中继",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python main.py server                             # 使用配置文件启动服务端
  python main.py server --host 127.0.0.1 --port 8080  # 指定监听地址
  python main.py client                             # 获取一次报价并写入 cotacao.txt
  python main.py client --output /tmp/cotacao.txt --timeout 0.5
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    server_parser = subparsers.add_parser('server', help='启动报价服务端')
    server_parser.add_argument('--host', default=None, help='监听地址 (默认读取 api_config.host)')
    server_parser.add_argument('--port', type=int, default=None, help='监听端口 (默认读取 api_config.port)')

    client_parser = subparsers.add_parser('client', help='调用服务端一次并写入文件')
    client_parser.add_argument('--url', default=None, help='服务端地址 (默认读取 client_config.server_url)')
    client_parser.add_argument('--output', default=None, help='输出文件 (默认读取 client_config.output_file)')
    client_parser.add_argument('--timeout', type=float, default=None, help='超时秒数 (默认读取 client_config.timeout)')

    return parser


async def main(argv=None):
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    system = QuoteSystem()

    if args.command == 'server':
        try:
            await system.start_api_server(host=args.host, port=args.port)
        except KeyboardInterrupt:
            api_logger.info("[Main] Received keyboard interrupt")

    elif args.command == 'client':
        try:
            await system.run_client(url=args.url, output=args.output, timeout=args.timeout)
        except QuoteSystemError as e:
            # 客户端的任何失败都是致命的
            client_logger.critical(f"[Main] {e}")
            sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
