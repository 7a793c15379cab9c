from balance_checker.main import run

run()
