import random
import unittest
import unittest.mock as mock

from components import GameStatus, ItemType, MoveResult, Position, TileType
from config import GameConfig
from entities import create_skeleton, create_treasure_chest, create_gem, create_key, create_orc
from game import Game, WELCOME_MESSAGES
from game_modes import TreasureHuntCondition

class TestNewGame(unittest.TestCase):

    def test_new_game_from_mode_key(self):
        game = Game.new_game("treasure_hunt", rng=random.Random(3))
        self.assertIsInstance(game.condition, TreasureHuntCondition)
        self.assertEqual(game.state.turn, 0)
        self.assertFalse(game.state.game_over)
        self.assertEqual(list(game.state.log)[:3], list(WELCOME_MESSAGES))
        self.assertIn("Find and collect the treasure!", game.state.log[-1])
        self.assertEqual(game.state.world.size, (50, 30))
        self.assertEqual(game.check_status(), GameStatus.PLAYING)

    def test_new_game_uses_config(self):
        config = GameConfig()
        config.grid_width = 30
        config.grid_height = 20
        config.survival_target_turns = 12
        config.log_capacity = 10
        game = Game.new_game("survival", config=config, rng=random.Random(5))
        self.assertEqual(game.state.world.size, (30, 20))
        self.assertEqual(game.condition.target_turns, 12)
        self.assertEqual(game.state.log.capacity, 10)

    def test_new_game_with_condition_instance(self):
        condition = TreasureHuntCondition()
        game = Game.new_game(condition)
        self.assertIs(game.condition, condition)

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            Game.new_game("hide_and_seek")

class TestGameCommands(unittest.TestCase):

    def setUp(self):
        self.game = Game.new_game("treasure_hunt", rng=random.Random(11))
        self.state = self.game.state
        # Only the characters a test adds take part
        self.state.npcs.clear()
        self.state.world.items.clear()
        self.state.player.move_to(Position(10, 15))

    def test_treasure_hunt_scenario(self):
        """Chest, then a key from a skeleton, then the treasure wins the game."""
        self.state.world.add_item(11, 15, create_treasure_chest())
        self.assertIs(self.game.attempt_move(1, 0), MoveResult.MOVED)
        self.game.pickup()
        self.assertEqual([item.item_type for item in self.game.inventory], [ItemType.TREASURE_CHEST])
        self.assertEqual(self.game.check_status(), GameStatus.PLAYING)

        self.state.npcs.append(create_skeleton(12, 15))
        self.assertIs(self.game.attempt_move(1, 0), MoveResult.INTERACTED)
        self.assertIsNone(self.game.npc_at(12, 15))
        self.assertEqual(self.game.item_at(12, 15).item.item_type, ItemType.KEY)

        self.game.attempt_move(1, 0)
        key = self.game.pickup()
        self.assertEqual(key.item_type, ItemType.KEY)

        result = self.game.use_item(key)
        self.assertEqual([item.item_type for item in result.dropped_on_ground], [ItemType.TREASURE])
        self.assertEqual(self.game.inventory, [], "Both key and chest are spent")
        treasure = self.game.item_at(12, 15)
        self.assertEqual(treasure.item.item_type, ItemType.TREASURE)
        self.assertEqual(self.game.check_status(), GameStatus.PLAYING)

        self.game.pickup()
        self.assertEqual(self.game.check_status(), GameStatus.WON)
        self.assertTrue(self.state.game_over)

    def test_use_item_returns_locked_chest(self):
        chest = create_treasure_chest()
        gem = create_gem()
        self.state.player.inventory.extend([chest, gem])
        result = self.game.use_item(chest)
        self.assertEqual(result.returned_to_inventory, chest)
        self.assertEqual(self.game.inventory, [gem, chest], "Returned items go to the back of the inventory")

    def test_use_item_consumes_gem(self):
        gem = create_gem()
        self.state.player.inventory.append(gem)
        self.game.use_item(gem)
        self.assertEqual(self.game.inventory, [])
        self.assertEqual(self.state.world.items, [])

    def test_use_item_requires_ownership(self):
        self.state.player.inventory.append(create_treasure_chest())
        with self.assertRaises(ValueError):
            self.game.use_item(create_key())
        self.assertEqual([item.item_type for item in self.game.inventory], [ItemType.TREASURE_CHEST])
        self.assertEqual(self.state.world.items, [])

    def test_move_player_advances_turns(self):
        self.assertIs(self.game.move_player(1, 0), MoveResult.MOVED)
        self.assertEqual(self.state.turn, 1)

        self.state.npcs.append(create_skeleton(12, 15))
        self.assertIs(self.game.move_player(1, 0), MoveResult.INTERACTED)
        self.assertEqual(self.state.turn, 2, "Interactions consume a turn")

        self.state.player.move_to(Position(1, 1))
        self.assertIs(self.game.move_player(0, -1), MoveResult.BLOCKED)
        self.assertEqual(self.state.turn, 2, "Bumping a wall is free")

    def test_pickup_and_advance(self):
        self.assertIsNone(self.game.pickup_and_advance())
        self.assertEqual(self.state.turn, 0)
        self.state.world.add_item(10, 15, create_gem())
        self.assertIsNotNone(self.game.pickup_and_advance())
        self.assertEqual(self.state.turn, 1)

    def test_use_and_advance(self):
        self.assertIsNone(self.game.use_and_advance(0), "Nothing to use")
        self.state.player.inventory.append(create_gem())
        self.assertIsNotNone(self.game.use_and_advance(0))
        self.assertEqual(self.state.turn, 1)
        self.assertEqual(self.game.inventory, [])

    def test_run_npc_turn_logs_npc_messages(self):
        self.state.npcs.append(create_orc(11, 15))
        with mock.patch.object(self.state.rng, 'randint', return_value=9):
            messages = self.game.run_npc_turn()
        self.assertEqual(messages, ["Gorbag attacks you for 9 damage!"])
        self.assertEqual(self.game.log_tail(1), messages)
        self.assertEqual(self.state.player.health, 91)

    def test_death_ends_the_game(self):
        self.state.player.take_damage(1000)
        self.assertEqual(self.game.check_status(), GameStatus.LOST)
        self.assertTrue(self.state.game_over)

    def test_survival_win(self):
        config = GameConfig()
        config.survival_target_turns = 3
        game = Game.new_game("survival", config=config, rng=random.Random(2))
        game.state.npcs.clear()
        for _ in range(2):
            game.run_npc_turn()
        self.assertEqual(game.check_status(), GameStatus.PLAYING)
        game.run_npc_turn()
        self.assertEqual(game.check_status(), GameStatus.WON)

    def test_accessors(self):
        self.assertEqual(self.game.tile_at(0, 0), TileType.WALL)
        self.assertIsNone(self.game.tile_at(-1, 0))
        self.assertIs(self.game.player, self.state.player)
        self.assertEqual(self.game.log_tail(2), self.state.log.tail(2))
        inventory = self.game.inventory
        inventory.append(create_gem())
        self.assertEqual(self.state.player.inventory, [], "The inventory accessor returns a copy")

if __name__ == '__main__':
    unittest.main()
